import numpy as np
from typing import Callable
from dataclasses import dataclass
from functools import singledispatch
from ...types import Sequence3, Vector3
from ...functions import normalize

from ..geometry import *

__all__ = ['getsdb', 'spheretrace', 'spheretrace_getsdb', 'getnormal', 'getnormal_getsdb', 'traverse', 'SphereTrace']


def getsdb(surface: Surface, x: Sequence3) -> float:
    """Get signed distance bound.

    Args:
        x: Position 3-vector.
    """
    return surface.getsdb(np.asarray(x, float))


def getnormal_getsdb(getsdb: Callable, x: Vector3, h: float) -> np.ndarray:
    """Surface normal by central differences along each axis (six samples)."""
    offsets = np.eye(3)*h
    return normalize(np.array([getsdb(x + o) - getsdb(x - o) for o in offsets]))


def getnormal(surface: Surface, x: Sequence3, h: float = 1e-6) -> np.ndarray:
    return getnormal_getsdb(surface.getsdb, np.asarray(x, float), h)


@singledispatch
def traverse(s: Surface, x: Vector3):
    """Depth-first traversal starting at s yielding (surface, signed distance) for each descendent."""
    raise NotImplementedError(s)


@traverse.register
def _(s: Primitive, x: Vector3):
    d = s.getsdb(x)
    yield s, d
    return d


@traverse.register
def _(self: UnionOp, x: Vector3):
    d = yield from traverse(self.surfaces[0], x)
    for child in self.surfaces[1:]:
        d_child = yield from traverse(child, x)
        d = min(d, d_child)
    yield self, d
    return d


@traverse.register
def _(self: IntersectionOp, x: Vector3):
    d = yield from traverse(self.surfaces[0], x)
    for child in self.surfaces[1:]:
        d_child = yield from traverse(child, x)
        d = max(d, d_child)
    yield self, d
    return d


@traverse.register
def _(self: SubtractionOp, x: Vector3):
    da = yield from traverse(self.a, x)
    db = yield from traverse(self.b, x)
    d = max(-da, db)
    yield self, d
    return d


@dataclass
class SphereTrace:
    """Outcome of a sphere trace.

    Attributes:
        d: Last evaluated signed distance (inf if no evaluation took place).
        t: Ray parameter at termination.
        x: Point at which d was evaluated, or the ray origin if no evaluation took place.
        steps: Number of advances taken.
        termination: 'hit' (d below epsilon), 'far' (t beyond t_max) or 'max_steps' (step budget exhausted).
    """
    d: float
    t: float
    x: np.ndarray
    steps: int
    termination: str

    @property
    def hit(self) -> bool:
        return self.termination == 'hit'


def spheretrace_getsdb(getsdb: Callable, x0: Vector3, v: Vector3, t_max: float, epsilon: float, max_steps: int):
    """Sphere trace along x0 + t*v, t >= 0.

    Each step advances t by the signed distance at the current point. The trace is a miss once t exceeds t_max. The
    step count is capped independently so that fields returning tiny positive distances still terminate.

    Returns:
        Tuple (d, t, x, steps, termination) - see SphereTrace.
    """
    t = 0.
    d = np.inf
    x = x0
    for steps in range(max_steps):
        if t > t_max:
            return d, t, x, steps, 'far'
        x = x0 + v*t
        d = getsdb(x)
        if d < epsilon:
            return d, t, x, steps, 'hit'
        t += d
    return d, t, x, max_steps, 'max_steps'


def spheretrace(surface: Surface, x0: Sequence3, v: Sequence3, t_max: float, epsilon: float, max_steps: int) -> SphereTrace:
    """Spheretrace scalar (no broadcasting).

    Args:
        surface: Distance field to trace.
        x0: Initial position.
        v: Unit direction.
        t_max: Distance beyond which the trace is a miss.
        epsilon: Hit threshold on the signed distance.
        max_steps: Limit on the number of steps.
    """
    x0 = np.asarray(x0, float)
    v = np.asarray(v, float)
    assert x0.shape == (3,)
    assert v.shape == (3,)
    assert t_max > 0

    return SphereTrace(*spheretrace_getsdb(surface.getsdb, x0, v, t_max, epsilon, max_steps))
