"""Backend compiling a distance field tree into a single jitted function."""
from .base import *
from . import primitives
