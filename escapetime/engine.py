"""
Escape-time engine for the generalized Mandelbrot family z <- z^p + z.

Every pixel (x, y) of a size x size grid samples the plane point

    re0 = -scale/2 + scale*x/size
    im0 = -scale/2 + scale*y/size

and iterates z <- z^p + z from z0 = (re0, im0) until |z| > 2 or
MAX_ITERATION steps have run. The count is turned into a color by a palette.

Buffers are row-major images: buffer[y, x] holds pixel (x, y), so x runs
along the real axis (columns) and y along the imaginary axis (rows).

Two backends compute the counts:
  "reference"  -> one Complex at a time, x outer, y inner
  "vectorized" -> numpy arrays, same formulas in the same operand order,
                  so the output is bit-identical to "reference"
"""

from __future__ import annotations

import numpy as np

from escapetime.complex_math import Complex, add, magnitude, power
from escapetime.config import FractalConfig
from escapetime.errors import ConfigurationError, NoImageError
from escapetime.palette import pick_palette

MAX_ITERATION = 1024
ESCAPE_RADIUS = 2.0

BACKENDS = ("reference", "vectorized")


def plane_coordinate(index, size, scale):
    """Pixel index -> plane coordinate. Works on ints and numpy arrays."""
    return -scale / 2 + scale * index / size


def tends_to_infinity(z: Complex) -> bool:
    return magnitude(z) > ESCAPE_RADIUS


def check_point(z0: Complex, complexity: int, max_iteration: int = MAX_ITERATION) -> int:
    """
    Number of iterations z0 survives before escaping, capped at max_iteration.

    A point that starts outside the escape radius returns 0 without iterating.
    """
    z = z0
    count = 0
    while not tends_to_infinity(z) and count < max_iteration:
        z = add(power(z, complexity), z)
        count += 1
    return count


# -----------------------------
# count grids
# -----------------------------

def _counts_reference(config: FractalConfig, max_iteration: int) -> np.ndarray:
    size, scale, p = config.size, config.scale, config.complexity
    counts = np.zeros((size, size), dtype=np.int32)

    for x in range(size):
        for y in range(size):
            x0 = plane_coordinate(x, size, scale)
            y0 = plane_coordinate(y, size, scale)
            counts[y, x] = check_point(Complex(x0, y0), p, max_iteration)

    return counts


def _power_arrays(re, im, n):
    """Array twin of complex_math.power, same multiply order."""
    if n == 0:
        return np.ones_like(re), np.zeros_like(im)

    ret_re, ret_im = re, im
    for _ in range(1, abs(n)):
        ret_re, ret_im = (
            re * ret_re - im * ret_im,
            re * ret_im + im * ret_re,
        )

    if n < 0:
        scale = (ret_re * ret_re) + (ret_im * ret_im)
        ret_re, ret_im = ret_re / scale, -ret_im / scale
    return ret_re, ret_im


def _counts_vectorized(config: FractalConfig, max_iteration: int) -> np.ndarray:
    size, scale, p = config.size, config.scale, config.complexity

    axis = plane_coordinate(np.arange(size, dtype=np.float64), size, scale)
    # zr[y, x] = axis[x], zi[y, x] = axis[y]
    zr, zi = np.meshgrid(axis, axis)

    counts = np.zeros((size, size), dtype=np.int32)
    active = np.ones((size, size), dtype=bool)

    with np.errstate(all="ignore"):
        for _ in range(max_iteration):
            # nan magnitudes compare False, so those pixels keep iterating
            active &= ~(np.hypot(zr, zi) > ESCAPE_RADIUS)
            if not active.any():
                break

            ar = zr[active]
            ai = zi[active]
            pr, pi = _power_arrays(ar, ai, p)
            zr[active] = pr + ar
            zi[active] = pi + ai
            counts[active] += 1

    return counts


def escape_counts(config: FractalConfig, backend: str = "reference",
                  max_iteration: int = MAX_ITERATION) -> np.ndarray:
    """Iteration count per pixel, int32 array of shape (size, size)."""
    if backend == "reference":
        return _counts_reference(config, max_iteration)
    if backend == "vectorized":
        return _counts_vectorized(config, max_iteration)
    raise ConfigurationError(f"Unknown backend: {backend} (expected one of {', '.join(BACKENDS)})")


def render(config: FractalConfig, *, palette="classic", backend="reference") -> np.ndarray:
    """
    Render a fresh (size, size, 3) uint8 buffer.

    palette is a name known to pick_palette or a callable
    palette(counts, max_iteration) -> uint8 (..., 3).
    """
    colorize = pick_palette(palette) if isinstance(palette, str) else palette
    counts = escape_counts(config, backend=backend)
    return np.ascontiguousarray(colorize(counts, MAX_ITERATION), dtype=np.uint8)


# -----------------------------
# engine object
# -----------------------------

class FractalEngine:
    """
    Holds one fractal configuration and, once drawn, its pixel buffer.

    An engine built with from_image wraps an existing buffer and never
    computes anything. Buffers leave the engine as copies.
    """

    def __init__(self, config: FractalConfig = None, *, palette="classic", backend="reference"):
        self._config = config if config is not None else FractalConfig()
        self._palette = palette
        self._backend = backend
        self._image = None
        self._wrapped = False

    @classmethod
    def from_image(cls, image) -> "FractalEngine":
        buf = np.asarray(image)
        if buf.dtype != np.uint8 or buf.ndim != 3 or buf.shape[2] != 3 or buf.shape[0] != buf.shape[1]:
            raise ConfigurationError(
                f"Expected a square uint8 (n, n, 3) buffer, got {buf.dtype} {buf.shape}"
            )
        if buf.shape[0] == 0:
            raise ConfigurationError("Buffer must not be empty")

        engine = cls.__new__(cls)
        engine._config = None
        engine._palette = None
        engine._backend = None
        engine._image = buf.copy()
        engine._wrapped = True
        return engine

    @property
    def config(self):
        return self._config

    @property
    def size(self) -> int:
        if self._config is None:
            return self._image.shape[0]
        return self._config.size

    @property
    def scale(self):
        return None if self._config is None else self._config.scale

    @property
    def complexity(self):
        return None if self._config is None else self._config.complexity

    @property
    def has_image(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> np.ndarray:
        if self._image is None:
            raise NoImageError()
        return self._image.copy()

    def draw(self) -> np.ndarray:
        """Compute the buffer (unless wrapped) and return a copy of it."""
        if not self._wrapped:
            self._image = render(self._config, palette=self._palette, backend=self._backend)
        return self._image.copy()
