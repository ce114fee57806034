"""Quaternions stored as 4-vectors (x, y, z, w).

The first component is treated as the real part in the multiplication rules, so a point lifted with to_quaternion
has real part equal to its x coordinate. This matches the usual quaternion Julia set construction.
"""
from typing import Sequence
import numpy as np
import numba

__all__ = ['to_quaternion', 'qsquare', 'qcube', 'qlength_squared', 'is_quaternion', 'to_array']


@numba.njit
def to_quaternion(x):
    """Lift a 3-vector to the quaternion (x, y, z, 0)."""
    return np.array((x[0], x[1], x[2], 0.))


@numba.njit
def qsquare(a):
    return np.array((a[0]*a[0] - a[1]*a[1] - a[2]*a[2] - a[3]*a[3], 2.*a[0]*a[1], 2.*a[0]*a[2], 2.*a[0]*a[3]))


@numba.njit
def qcube(a):
    """Cube of a quaternion.

    With a = (s, v), a**3 = (s**3 - 3*s*|v|**2, (3*s**2 - |v|**2)*v).
    """
    b = a*a
    k = 3.*b[0] - b[1] - b[2] - b[3]
    return np.array((a[0]*(b[0] - 3.*b[1] - 3.*b[2] - 3.*b[3]), a[1]*k, a[2]*k, a[3]*k))


@numba.njit
def qlength_squared(a):
    return a[0]*a[0] + a[1]*a[1] + a[2]*a[2] + a[3]*a[3]


def is_quaternion(q: np.ndarray) -> bool:
    return q.shape == (4,)


def to_array(q: Sequence[float]) -> np.ndarray:
    q = np.array(q, float)
    assert is_quaternion(q)
    return q
