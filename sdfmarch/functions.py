"""Vector algebra and distance estimator kernels.

Everything here is jitted with numba so that the same code serves the scalar backend (called from Python) and the
numba backend (called from generated code). Both backends therefore agree to the last bit on shared kernels.
"""
import math
import numpy as np
import numba
from .v4h import to_quaternion, qsquare, qcube, qlength_squared

__all__ = ['dot', 'norm_squared', 'norm', 'normalize', 'cross', 'clamp', 'julia_sdb', 'ESCAPE_RADIUS_SQUARED']

# Escape threshold on |z|**2 of the quaternion Julia iteration.
ESCAPE_RADIUS_SQUARED = 256.


@numba.njit
def dot(x, y):
    s = 0.
    for i in range(len(x)):
        s += x[i]*y[i]
    return s


@numba.njit
def norm_squared(x):
    return dot(x, x)


@numba.njit
def norm(x):
    return norm_squared(x)**0.5


@numba.njit
def normalize(x):
    return np.asarray(x)/norm(x)


@numba.njit
def cross(a, b):
    return np.array((a[1]*b[2] - a[2]*b[1], a[2]*b[0] - a[0]*b[2], a[0]*b[1] - a[1]*b[0]))


@numba.njit
def clamp(x, lo, hi):
    return min(max(x, lo), hi)


@numba.njit
def julia_sdb(x, center, c, max_iterations, trap, trap_center, trap_radius, clip, clip_height):
    """Distance estimate of the cubic quaternion Julia set z -> z**3 + c.

    The estimate 0.25*ln|z|**2*sqrt(|z|**2/|dz|**2) is a heuristic and can exceed the true distance near thin
    structure.

    Args:
        x: Position 3-vector.
        center: Center of the set.
        c: Quaternion constant.
        max_iterations: Iteration limit. Zero gives the estimate of the starting point.
        trap: Whether to take the minimum with the orbit trap distance.
        trap_center: 2-vector target in the (x, z) plane of the iterate.
        trap_radius: Radius subtracted from the trap distance.
        clip: Whether to cut away everything above clip_height.
        clip_height: Height of the clipping plane.
    """
    z = to_quaternion(x - center)
    mz2 = qlength_squared(z)
    md2 = 1.
    trap_d = np.inf
    for _ in range(max_iterations):
        if mz2 > ESCAPE_RADIUS_SQUARED:
            break
        # dz -> 3*z**2*dz
        md2 *= 9.*qlength_squared(qsquare(z))
        z = qcube(z) + c
        mz2 = qlength_squared(z)
        trap_d = min(trap_d, ((z[0] - trap_center[0])**2 + (z[2] - trap_center[1])**2)**0.5 - trap_radius)
    # Iteration landed on the origin (or started there) - no finite estimate.
    if mz2 == 0. or md2 == 0.:
        d = 0.
    else:
        d = 0.25*math.log(mz2)*(mz2/md2)**0.5
    if trap:
        d = min(d, trap_d)
    if clip:
        d = max(d, x[1] - clip_height)
    return d
