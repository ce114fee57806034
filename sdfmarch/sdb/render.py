"""Camera, image assembly and output.

Rendering fans out one task per scanline. Each task only reads the marcher and viewport, so rows can be computed in
any order and in any number of processes.
"""
import logging
import multiprocessing
import time
import numpy as np
from matplotlib import image as mpimage
from scipy.spatial.transform import Rotation
from ..types import Image, Sequence3
from .marcher import Ray, RayMarcher

__all__ = ['Viewport', 'pix2norm', 'render_row', 'render', 'to_pixels', 'save_image']

logger = logging.getLogger(__name__)


class Viewport:
    """Pinhole camera looking through a rectangular viewport.

    With no rotation the camera looks along -z with y up. yaw (about y) then pitch (about x) in degrees rotate the
    viewport about the origin.
    """
    def __init__(self, origin: Sequence3 = (0., 0., 0.), aspect_ratio: float = 16/9, height: float = 2.,
            focal_length: float = 1.5, yaw: float = 0., pitch: float = 0.):
        origin = np.array(origin, float)
        assert origin.shape == (3,)
        self.origin = origin
        self.aspect_ratio = float(aspect_ratio)
        self.height = float(height)
        self.focal_length = float(focal_length)
        self.yaw = float(yaw)
        self.pitch = float(pitch)

        rotation = Rotation.from_euler('yx', (self.yaw, self.pitch), degrees=True)
        self.horizontal = rotation.apply((self.aspect_ratio*self.height, 0., 0.))
        self.vertical = rotation.apply((0., self.height, 0.))
        forward = rotation.apply((0., 0., self.focal_length))
        self.lower_left_corner = self.origin - self.horizontal/2 - self.vertical/2 - forward

    @property
    def width(self) -> float:
        return self.aspect_ratio*self.height

    def get_ray(self, u: float, v: float) -> Ray:
        """Ray through viewport point with normalized coordinates (u, v) - (0, 0) is lower left, (1, 1) upper right."""
        pixel_pos = self.lower_left_corner + self.horizontal*u + self.vertical*v
        return Ray.make(self.origin, pixel_pos - self.origin)


def pix2norm(i: int, r: int) -> float:
    """Map pixel index in range(r) onto [0, 1].

    i=0, r=5 -> 0
    i=4, r=5 -> 1
    A single pixel maps to the middle.
    """
    if r == 1:
        return 0.5
    return i/(r - 1)


def render_row(marcher: RayMarcher, viewport: Viewport, j: int, width: int, height: int) -> np.ndarray:
    """Render scanline j counted from the bottom.

    Returns:
        (width, 3) array.
    """
    row = np.empty((width, 3))
    v = pix2norm(j, height)
    for i in range(width):
        row[i] = marcher.march(viewport.get_ray(pix2norm(i, width), v))
    return row


_worker_args = None


def _init_worker(marcher: RayMarcher, viewport: Viewport, width: int, height: int):
    global _worker_args
    _worker_args = marcher, viewport, width, height


def _render_worker_row(j: int):
    marcher, viewport, width, height = _worker_args
    return j, render_row(marcher, viewport, j, width, height)


def render(marcher: RayMarcher, viewport: Viewport, width: int, height: int, processes: int = None) -> Image:
    """Render image with top row first.

    Args:
        processes: Number of worker processes. None means one per CPU, 1 renders in this process.

    Returns:
        (height, width, 3) array with values in [0, 1].
    """
    if width < 1 or height < 1:
        raise ValueError(f'Invalid image size {width}x{height}.')
    if processes is not None and processes < 1:
        raise ValueError(f'Invalid number of processes {processes}.')

    image = np.zeros((height, width, 3))
    timer_start = time.perf_counter()
    if processes == 1:
        for j in range(height):
            image[height - j - 1] = render_row(marcher, viewport, j, width, height)
    else:
        with multiprocessing.Pool(processes, _init_worker, (marcher, viewport, width, height)) as pool:
            for j, row in pool.imap_unordered(_render_worker_row, range(height)):
                image[height - j - 1] = row
    timer_duration = time.perf_counter() - timer_start

    logger.info('Rendered image (%dx%d) in %.3f s.', width, height, timer_duration)
    return image


def to_pixels(image: Image) -> np.ndarray:
    """Quantize to 8 bits per channel as floor(255.999*value)."""
    return np.floor(255.999*np.clip(image, 0., 1.)).astype(np.uint8)


def save_image(image: Image, path: str):
    mpimage.imsave(path, to_pixels(image))
    logger.info('Saved image to %s.', path)
