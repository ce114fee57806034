import sys
import argparse
import logging
from .. import _utility
from . import demoscenes
from .marcher import BACKENDS, MarchConfig, RayMarcher
from .render import Viewport, render, save_image

logger = logging.getLogger(__name__)


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Render a demo signed distance field scene by sphere tracing. Defaults are read from the march and '
                    'render sections of sdfmarch.yml in the current or home directory.')
    parser.add_argument('--scene', default='sphere_cuboid', help='one of ' + ', '.join(demoscenes.make_all_scenes()))
    parser.add_argument('--width', type=int, help='image width in pixels (default 720)')
    parser.add_argument('--height', type=int, help='image height in pixels (default width/aspect ratio)')
    parser.add_argument('-o', '--output', default='out.png', help='output image file')
    parser.add_argument('-p', '--processes', type=int, help='number of worker processes (default one per CPU)')
    parser.add_argument('--backend', choices=BACKENDS, help='distance field evaluation backend (default scalar)')
    parser.add_argument('--debug', action='store_true', help='shade by number of sphere tracing steps')
    parser.add_argument('-v', '--verbose', action='store_true', help='log progress')
    return parser


def _get_setting(arg, settings: dict, key: str, default):
    """Command line value if given, else configuration file value, else default."""
    if arg is not None:
        return arg
    return settings.get(key, default)


def render_scene(argv=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    config = _utility.load_config()
    march_settings = dict(config.get('march', {}))
    render_settings = config.get('render', {})
    if args.debug:
        march_settings['debug'] = True

    viewport = Viewport()
    width = _get_setting(args.width, render_settings, 'width', 720)
    height = _get_setting(args.height, render_settings, 'height', max(1, int(width/viewport.aspect_ratio)))
    processes = _get_setting(args.processes, render_settings, 'processes', None)

    try:
        surface = demoscenes.make_scene(args.scene)
        march_config = MarchConfig.from_dict(march_settings)
        backend = args.backend or render_settings.get('backend', 'scalar')
        marcher = RayMarcher(surface, march_config, backend)
        logger.info('Rendering %s at %dx%d.', args.scene, width, height)
        image = render(marcher, viewport, width, height, processes)
    except ValueError as e:
        print(e.args[0])
        sys.exit(1)

    try:
        save_image(image, args.output)
    except OSError as e:
        print(f'Could not save {args.output}: {e}')
        sys.exit(1)
