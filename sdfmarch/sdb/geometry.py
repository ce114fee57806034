from typing import List, Sequence
import numpy as np
from ..types import Sequence2, Sequence3, Sequence4, Vector3
from ..functions import normalize, norm, dot, julia_sdb
from .. import v4h

__all__ = ['Surface', 'Primitive', 'Compound', 'Sphere', 'Cuboid', 'Torus', 'Plane', 'Julia', 'UnionOp',
    'SubtractionOp', 'IntersectionOp']


class Surface:
    """Node of a signed distance field tree.

    A parent of None means no parent / parent is root. Compounds take ownership of their children on construction,
    so every surface appears at most once in a tree. Surfaces are not modified after the tree is built.
    """
    def __init__(self, parent: 'Surface' = None):
        self._parent = parent

    def get_ancestors(self) -> List['Surface']:
        """Return list of ancestors starting from self going to root."""
        surface = self
        surfaces = []
        while surface is not None:
            surfaces.append(surface)
            surface = surface._parent
        return surfaces

    def descendants(self):
        """Returns generator of descendants in depth-first traversal."""
        raise NotImplementedError(self)

    def scale(self, f: float) -> 'Surface':
        """Deep copy of self with coordinate system scaled by f."""
        raise NotImplementedError(self)

    def getsdb(self, x: Vector3) -> float:
        """Get signed distance bound.

        Negative inside, positive outside. The magnitude is no larger than the distance to the surface (except for
        heuristic estimators such as Julia).

        Args:
            x: Position 3-vector.
        """
        raise NotImplementedError(self)


class Primitive(Surface):
    def descendants(self):
        yield self


class Sphere(Primitive):
    def __init__(self, r: float, center: Sequence3 = None, parent: Surface = None):
        Primitive.__init__(self, parent)
        if center is None:
            center = 0., 0., 0.
        center = np.array(center, float)
        assert center.shape == (3,)
        self.r = float(r)
        self.center = center

    def scale(self, f: float) -> 'Sphere':
        return Sphere(self.r*f, self.center*f)

    def getsdb(self, x: Vector3) -> float:
        return norm(x - self.center) - self.r


class Cuboid(Primitive):
    def __init__(self, half_size: Sequence3, center: Sequence3 = None, parent: Surface = None):
        Primitive.__init__(self, parent)
        half_size = np.array(half_size, float)
        assert half_size.shape == (3,)

        if center is None:
            center = 0., 0., 0.
        center = np.array(center, float)
        assert center.shape == (3,)

        self.half_size = half_size
        self.center = center

    def scale(self, f: float) -> 'Cuboid':
        return Cuboid(self.half_size*f, self.center*f)

    def getsdb(self, x: Vector3) -> float:
        q = np.abs(x - self.center) - self.half_size
        return norm(np.maximum(q, 0.)) + min(max(q[0], max(q[1], q[2])), 0.)


class Torus(Primitive):
    """Circle of radius minor revolved around the y axis through center at distance major."""
    def __init__(self, major: float, minor: float, center: Sequence3 = None, parent: Surface = None):
        Primitive.__init__(self, parent)
        if center is None:
            center = 0., 0., 0.
        center = np.array(center, float)
        assert center.shape == (3,)
        self.major = float(major)
        self.minor = float(minor)
        self.center = center

    def scale(self, f: float) -> 'Torus':
        return Torus(self.major*f, self.minor*f, self.center*f)

    def getsdb(self, x: Vector3) -> float:
        xp = x - self.center
        rho = (xp[0]**2 + xp[2]**2)**0.5
        return ((rho - self.major)**2 + xp[1]**2)**0.5 - self.minor


class Plane(Primitive):
    """Half-space bounded by infinite plane.

     Signed distance equation:
        d = n.x + c
    """
    def __init__(self, n: Sequence3, c: float, parent: Surface = None):
        Primitive.__init__(self, parent)
        n = np.array(n, float)
        assert n.shape == (3,)
        self.n = normalize(n)
        self.c = float(c)

    def scale(self, f: float) -> 'Plane':
        return Plane(self.n, self.c*f)

    def getsdb(self, x: Vector3) -> float:
        return dot(x, self.n) + self.c


class Julia(Primitive):
    def __init__(self, c: Sequence4, center: Sequence3 = None, max_iterations: int = 11, trap: bool = False,
            clip: bool = False, trap_center: Sequence2 = (0., 0.), trap_radius: float = 0.1, clip_height: float = 0.,
            parent: Surface = None):
        """Cubic quaternion Julia set z -> z**3 + c.

        Args:
            c: Quaternion constant.
            center: Position of the origin of the iteration.
            max_iterations: Iteration limit.
            trap: Take the minimum with the orbit trap distance, which paints the closest approach of the orbit to
                trap_center as extra surface.
            clip: Cut away the half-space above clip_height, exposing a flat cross section.
            trap_center: Target in the (x, z) plane of the iterate.
            trap_radius: Radius subtracted from the trap distance.
            clip_height: Height of the clipping plane.
        """
        Primitive.__init__(self, parent)
        if center is None:
            center = 0., 0., 0.
        center = np.array(center, float)
        assert center.shape == (3,)
        trap_center = np.array(trap_center, float)
        assert trap_center.shape == (2,)
        max_iterations = int(max_iterations)
        if max_iterations < 0:
            raise ValueError(f'Negative max_iterations {max_iterations}.')

        self.c = v4h.to_array(c)
        self.center = center
        self.max_iterations = max_iterations
        self.trap = bool(trap)
        self.clip = bool(clip)
        self.trap_center = trap_center
        self.trap_radius = float(trap_radius)
        self.clip_height = float(clip_height)

    def getsdb(self, x: Vector3) -> float:
        return julia_sdb(x, self.center, self.c, self.max_iterations, self.trap, self.trap_center, self.trap_radius,
            self.clip, self.clip_height)


class Compound(Surface):
    def __init__(self, surfaces: Sequence[Surface], parent: Surface = None):
        Surface.__init__(self, parent)
        for s in surfaces:
            assert s._parent is None
            s._parent = self
        self.surfaces = tuple(surfaces)

    def descendants(self):
        for s in self.surfaces:
            yield from s.descendants()
        yield self


class UnionOp(Compound):
    """Points inside any child."""
    def __init__(self, surfaces: Sequence[Surface], parent: Surface = None):
        assert len(surfaces) >= 2
        Compound.__init__(self, surfaces, parent)

    def scale(self, f: float) -> 'UnionOp':
        return UnionOp([s.scale(f) for s in self.surfaces])

    def getsdb(self, x: Vector3) -> float:
        d = self.surfaces[0].getsdb(x)
        for surface in self.surfaces[1:]:
            d = min(d, surface.getsdb(x))
        return d


class IntersectionOp(Compound):
    """Points inside every child."""
    def __init__(self, surfaces: Sequence[Surface], parent: Surface = None):
        assert len(surfaces) >= 2
        Compound.__init__(self, surfaces, parent)

    def scale(self, f: float) -> 'IntersectionOp':
        return IntersectionOp([s.scale(f) for s in self.surfaces])

    def getsdb(self, x: Vector3) -> float:
        d = self.surfaces[0].getsdb(x)
        for surface in self.surfaces[1:]:
            d = max(d, surface.getsdb(x))
        return d


class SubtractionOp(Compound):
    """Region of b with region of a removed."""
    def __init__(self, a: Surface, b: Surface, parent: Surface = None):
        Compound.__init__(self, (a, b), parent)

    @property
    def a(self) -> Surface:
        return self.surfaces[0]

    @property
    def b(self) -> Surface:
        return self.surfaces[1]

    def scale(self, f: float) -> 'SubtractionOp':
        return SubtractionOp(self.a.scale(f), self.b.scale(f))

    def getsdb(self, x: Vector3) -> float:
        return max(-self.a.getsdb(x), self.b.getsdb(x))
