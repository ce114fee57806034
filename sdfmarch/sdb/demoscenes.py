"""Example scenes viewed by the default Viewport (camera at origin looking along -z)."""
from typing import Callable, Dict
from .geometry import *

__all__ = ['make_sphere_cuboid', 'make_julia', 'make_csg', 'make_all_scenes', 'make_scene']


def make_sphere_cuboid() -> Surface:
    sphere = Sphere(0.5, (0., 0., -2.))
    cuboid = Cuboid((0.5, 0.7, 0.5), (0.8, 0., -2.))
    return UnionOp((sphere, cuboid))


def make_julia() -> Surface:
    """Cubic quaternion Julia set sliced at y = 0, with orbit trap rings, sitting on a floor."""
    julia = Julia((-0.2, 0.6, 0.5, -0.3), (0., 0., -2.5), max_iterations=11, trap=True, clip=True,
        trap_center=(0.3, 0.1), trap_radius=0.05, clip_height=0.)
    floor = Plane((0., 1., 0.), 1.2)
    return UnionOp((julia, floor))


def make_csg() -> Surface:
    # Cuboid with a spherical bite taken out.
    bitten = SubtractionOp(Sphere(0.55, (-0.9, 0.3, -2.2)), Cuboid((0.4, 0.4, 0.4), (-1.1, 0., -2.5)))
    # Lens shape.
    lens = IntersectionOp((Sphere(0.6, (0.15, 0., -2.5)), Sphere(0.6, (-0.15, 0., -2.5))))
    torus = Torus(0.4, 0.12, (1.1, 0., -2.5))
    floor = Plane((0., 1., 0.), 0.5)
    return UnionOp((bitten, lens, torus, floor))


_scene_makers: Dict[str, Callable[[], Surface]] = {
    'sphere_cuboid': make_sphere_cuboid,
    'julia': make_julia,
    'csg': make_csg,
}


def make_scene(name: str) -> Surface:
    try:
        maker = _scene_makers[name]
    except KeyError:
        raise ValueError(f'Unknown scene {name}. Choose from {", ".join(_scene_makers)}.') from None
    return maker()


def make_all_scenes() -> Dict[str, Surface]:
    return {name: maker() for name, maker in _scene_makers.items()}
