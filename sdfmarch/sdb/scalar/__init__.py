"""Reference backend - distance fields evaluated by the Surface methods."""
from .base import *
