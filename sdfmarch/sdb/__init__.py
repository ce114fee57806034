"""Signed distance bounds - scene trees, sphere tracing and shading.

Backends evaluating the distance field are in subpackages scalar and numba.
"""
from .geometry import *
from .marcher import *
from .render import *
