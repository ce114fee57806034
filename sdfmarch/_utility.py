"""Miscellaneous non-geometry stuff."""
import os
import yaml

CONFIG_FILENAME = 'sdfmarch.yml'


def load_config() -> dict:
    """Load user configuration from sdfmarch.yml in the current directory or else the home directory."""
    for path in os.curdir, os.path.expanduser('~'):
        try:
            with open(os.path.join(path, CONFIG_FILENAME), 'rt') as file:
                config = yaml.load(file, Loader=yaml.FullLoader)
        except FileNotFoundError:
            continue
        # An empty file loads as None.
        return config or {}
    return {}
