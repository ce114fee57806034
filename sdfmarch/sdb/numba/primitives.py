import numpy as np
from numba import njit
from ...functions import norm, dot, julia_sdb
from ..geometry import *
from .base import *

__all__ = []


@gen_getsdb.register
def _(s: Sphere):
    center = s.center
    r = s.r
    @njit
    def g(x):
        return norm(x - center) - r
    return g


@gen_getsdb.register
def _(s: Cuboid):
    half_size = s.half_size
    center = s.center
    @njit
    def g(x):
        q = np.abs(x - center) - half_size
        return norm(np.maximum(q, 0.)) + min(max(q[0], max(q[1], q[2])), 0.)
    return g


@gen_getsdb.register
def _(s: Torus):
    center = s.center
    major = s.major
    minor = s.minor
    @njit
    def g(x):
        xp = x - center
        rho = (xp[0]**2 + xp[2]**2)**0.5
        return ((rho - major)**2 + xp[1]**2)**0.5 - minor
    return g


@gen_getsdb.register
def _(s: Plane):
    n = s.n
    c = s.c
    @njit
    def g(x):
        return dot(x, n) + c
    return g


@gen_getsdb.register
def _(s: Julia):
    center = s.center
    c = s.c
    max_iterations = s.max_iterations
    trap = s.trap
    trap_center = s.trap_center
    trap_radius = s.trap_radius
    clip = s.clip
    clip_height = s.clip_height
    @njit
    def g(x):
        return julia_sdb(x, center, c, max_iterations, trap, trap_center, trap_radius, clip, clip_height)
    return g
