"""Sphere tracing integrator and shading.

A RayMarcher combines a distance field with a MarchConfig. Both are fixed at construction, so march is a pure function
of the ray and can be evaluated for many pixels concurrently.
"""
import logging
from dataclasses import dataclass, fields
from typing import Optional, Tuple
import numpy as np
from ..types import Color, Sequence3, Vector3
from ..functions import dot, normalize, clamp
from .geometry import Surface
from . import scalar

__all__ = ['Ray', 'MarchConfig', 'RayMarcher', 'BACKENDS']

logger = logging.getLogger(__name__)

BACKENDS = 'scalar', 'numba'


@dataclass(frozen=True)
class Ray:
    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self):
        assert self.origin.shape == (3,)
        assert self.direction.shape == (3,)

    @classmethod
    def make(cls, origin: Sequence3, direction: Sequence3) -> 'Ray':
        """Make ray with direction normalized."""
        origin = np.array(origin, float)
        direction = normalize(np.array(direction, float))
        return cls(origin, direction)

    def eval(self, t: float) -> np.ndarray:
        return self.origin + self.direction*t


Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class MarchConfig:
    """Constants of a render.

    light_dir is the direction the light travels (pointing away from the light) and is normalized on construction.
    shadow_dist_max and shadow_max_iterations default to max_distance and max_iterations.

    Shadow rays start accuracy above the surface. A hit lying exactly on the surface can then measure a distance just
    under accuracy and shadow itself. Setting shadow_dist_min to a few multiples of accuracy avoids this.
    """
    # quality
    max_iterations: int = 4000
    max_distance: float = 7.
    accuracy: float = 1e-5

    # misc
    debug: bool = False

    # normals
    normal_accuracy: float = 1e-6

    object_color: Triple = (1., 1., 1.)

    # sun light
    light_dir: Triple = (0.5, -1., 0.5)
    light_color: Triple = (1., 1., 1.)
    light_intensity: float = 1.

    # indirect light
    ambient_color: Triple = (1., 1., 1.)
    ambient_intensity: float = 0.1

    # shadow
    shadow_dist_min: float = 0.
    shadow_dist_max: Optional[float] = None
    shadow_max_iterations: Optional[int] = None
    shadow_fuzziness: float = 5.

    # ambient occlusion
    ao_step_size: float = 0.05
    ao_intensity: float = 0.3
    ao_iterations: int = 3

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError(f'Negative max_iterations {self.max_iterations}.')
        if self.max_distance <= 0:
            raise ValueError(f'Non-positive max_distance {self.max_distance}.')
        if self.ao_iterations < 0:
            raise ValueError(f'Negative ao_iterations {self.ao_iterations}.')
        if self.ao_iterations > 0 and self.ao_step_size <= 0:
            raise ValueError(f'Non-positive ao_step_size {self.ao_step_size}.')
        # Frozen, so set derived values via object.__setattr__.
        for name in 'object_color', 'light_color', 'ambient_color':
            object.__setattr__(self, name, _to_triple(getattr(self, name)))
        object.__setattr__(self, 'light_dir', _to_triple(normalize(np.array(self.light_dir, float))))
        if self.shadow_dist_max is None:
            object.__setattr__(self, 'shadow_dist_max', self.max_distance)
        if self.shadow_max_iterations is None:
            object.__setattr__(self, 'shadow_max_iterations', self.max_iterations)

    @classmethod
    def from_dict(cls, d: dict) -> 'MarchConfig':
        """Make from mapping e.g. the march section of a configuration file."""
        names = {f.name for f in fields(cls)}
        unknown = set(d) - names
        if unknown:
            raise ValueError(f'Unknown march settings {sorted(unknown)}.')
        return cls(**d)


def _to_triple(x) -> Triple:
    x = tuple(float(xi) for xi in x)
    if len(x) != 3:
        raise ValueError(f'Expected 3 components, got {len(x)}.')
    return x


class RayMarcher:
    def __init__(self, surface: Surface, config: MarchConfig = None, backend: str = 'scalar'):
        if config is None:
            config = MarchConfig()
        if backend not in BACKENDS:
            raise ValueError(f'Unknown backend {backend}.')
        self.surface = surface
        self.config = config
        self.backend = backend

        self.object_color = np.array(config.object_color)
        self.light_dir = np.array(config.light_dir)
        self.light_color = np.array(config.light_color)
        self.ambient_color = np.array(config.ambient_color)

        self._bind_backend()

    def _bind_backend(self):
        if self.backend == 'numba':
            from . import numba as sdbn
            self._getsdb = sdbn.get_cached_getsdb(self.surface)
        else:
            self._getsdb = self.surface.getsdb
        logger.info('Ray marcher using %s backend.', self.backend)

    # Jitted functions don't pickle, so worker processes rebuild them.
    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_getsdb']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._bind_backend()

    def getsdb(self, x: Vector3) -> float:
        return self._getsdb(x)

    def trace(self, ray: Ray) -> scalar.SphereTrace:
        cfg = self.config
        result = scalar.spheretrace_getsdb(self._getsdb, ray.origin, ray.direction, cfg.max_distance, cfg.accuracy,
            cfg.max_iterations)
        trace = scalar.SphereTrace(*result)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('%s - %s', ray, trace)
        return trace

    def march(self, ray: Ray) -> Color:
        """Color seen along ray.

        Misses (including exhausting the step budget) are black. In debug mode the color is a grey level encoding the
        number of steps as a fraction of max_iterations.
        """
        trace = self.trace(ray)
        if self.config.debug:
            return self.debug_color(trace.steps)
        if trace.hit:
            return self.shade(trace.x)
        return np.zeros(3)

    def debug_color(self, steps: int) -> Color:
        if self.config.max_iterations == 0:
            return np.ones(3)
        return np.ones(3)*steps/self.config.max_iterations

    def getnormal(self, x: Vector3) -> np.ndarray:
        return scalar.getnormal_getsdb(self._getsdb, x, self.config.normal_accuracy)

    def shadow(self, x: Vector3, n: Vector3) -> float:
        """Penumbra factor in [0, 1] of light arriving at x, with 0 fully shadowed.

        Marches from just above the surface towards the light. Passing within accuracy of any surface shadows fully,
        otherwise the factor is the minimum over steps of shadow_fuzziness*d/t.
        """
        cfg = self.config
        origin = x + n*cfg.accuracy
        direction = -self.light_dir

        t = cfg.shadow_dist_min
        result = 1.
        for _ in range(cfg.shadow_max_iterations):
            if t >= cfg.shadow_dist_max:
                break
            d = self._getsdb(origin + direction*t)
            if d < cfg.accuracy:
                return 0.
            # d/t is infinite at t = 0 so can't lower the factor.
            if t > 0:
                result = min(result, cfg.shadow_fuzziness*d/t)
            t += d

        return clamp(result, 0., 1.)

    def ambient_occlusion(self, x: Vector3, n: Vector3) -> float:
        """Multiplier in [0, 1] of the ambient light, lower where the field is dense above the surface."""
        cfg = self.config
        ao = 0.
        for i in range(cfg.ao_iterations):
            dist = cfg.ao_step_size*(i + 1)
            ao += max(0., (dist - self._getsdb(x + n*dist))/dist)
        return clamp(1. - ao*cfg.ao_intensity, 0., 1.)

    def shade(self, x: Vector3) -> Color:
        """Color of surface point x - diffuse sun light with soft shadow plus occluded ambient light."""
        cfg = self.config
        n = self.getnormal(x)
        shadow = self.shadow(x, n)
        ambient_occlusion = self.ambient_occlusion(x, n)

        sun_light = self.object_color*(self.light_color*clamp(dot(-self.light_dir, n), 0., 1.)*cfg.light_intensity*shadow)
        bg_light = self.object_color*(self.ambient_color*cfg.ambient_intensity)*ambient_occlusion

        return np.clip(sun_light + bg_light, 0., 1.)
