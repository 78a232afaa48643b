# tilemap_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 2D Perlin noise and the multi-octave NoiseField sampler
built on top of it. The kernels are pure, stateless functions compiled with
Numba.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array of length 512).
    - x, y: Coordinates in world units (scalars or NumPy arrays).
    - octaves, scale, persistence, lacunarity: Standard fractal parameters.
- Outputs:
    - perlin_2d: a single noise value in [-1, 1].
    - fractal_noise / NoiseField.get: values in [0, 1].
- Side Effects: None.
- Invariants: The same permutation table and coordinates always produce the
  same values. Array outputs match the broadcast shape of x and y.
================================================================================
"""

import numpy as np
from numba import njit

from .settings import ConfigurationError

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

PERMUTATION_SIZE = 256


def make_permutation_table(seed: int) -> np.ndarray:
    """Shuffles 0..255 with the given seed and doubles it to avoid wrapping."""
    p = np.arange(PERMUTATION_SIZE, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[0] * x + g[1] * y

@njit
def perlin_2d(p, x, y):
    """
    Single-octave 2D Perlin noise at one point, in the range [-1, 1].
    """
    x_floor = np.floor(x)
    y_floor = np.floor(y)

    xf = x - x_floor
    yf = y - y_floor

    u = _fade(xf)
    v = _fade(yf)

    # Wrap on the float before converting so very high octave frequencies
    # cannot overflow the integer conversion.
    px0 = int(x_floor % 256.0)
    px1 = (px0 + 1) % 256
    py0 = int(y_floor % 256.0)
    py1 = (py0 + 1) % 256

    # Numba requires scalar indexing
    idx00 = p[p[px0] + py0]
    idx01 = p[p[px0] + py1]
    idx10 = p[p[px1] + py0]
    idx11 = p[p[px1] + py1]

    g00 = _gradient(idx00, xf, yf)
    g01 = _gradient(idx01, xf, yf - 1)
    g10 = _gradient(idx10, xf - 1, yf)
    g11 = _gradient(idx11, xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    return _lerp(x1, x2, v)

@njit
def fractal_noise(p, x, y, octaves, scale, persistence, lacunarity):
    """
    Multi-octave noise at one point. Each octave is remapped from [-1, 1] to
    [0, 1] before it is weighted, and the sum is clamped to [0, 1].
    """
    accumulation = 0.0
    amplitude = 1.0
    frequency = 1.0

    for _ in range(octaves):
        sample_x = x / scale * frequency
        sample_y = y / scale * frequency

        value = (perlin_2d(p, sample_x, sample_y) + 1.0) / 2.0
        accumulation += value * amplitude

        amplitude *= persistence
        frequency *= lacunarity

    if accumulation > 1.0:
        accumulation = 1.0
    if accumulation < 0.0:
        accumulation = 0.0
    return accumulation

@njit
def fractal_noise_grid(p, xs, ys, octaves, scale, persistence, lacunarity):
    """
    Evaluates fractal_noise for every point of two flat coordinate arrays.
    This function is JIT-compiled with Numba, so the explicit loop compiles
    to efficient machine code.
    """
    total_noise = np.empty(xs.shape[0])
    for i in range(xs.shape[0]):
        total_noise[i] = fractal_noise(p, xs[i], ys[i], octaves, scale, persistence, lacunarity)
    return total_noise


class NoiseField:
    """
    A multi-octave noise sampler wrapping one seeded Perlin source.
    Holds no mutable state after construction.
    """
    def __init__(self, permutation_table: np.ndarray, octaves: int, scale: float,
                 persistence: float, lacunarity: float):
        if octaves < 1:
            raise ConfigurationError(f"octaves must be >= 1, got {octaves}")
        if scale <= 0:
            raise ConfigurationError(f"scale must be > 0, got {scale}")
        if persistence <= 0:
            raise ConfigurationError(f"persistence must be > 0, got {persistence}")
        if lacunarity <= 1:
            raise ConfigurationError(f"lacunarity must be > 1, got {lacunarity}")

        self._p = permutation_table
        self.octaves = int(octaves)
        self.scale = float(scale)
        self.persistence = float(persistence)
        self.lacunarity = float(lacunarity)

    def get(self, x, y):
        """
        Samples the field. Scalars return a float; arrays return an array of
        the broadcast shape.
        """
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return fractal_noise(
                self._p, float(x), float(y),
                self.octaves, self.scale, self.persistence, self.lacunarity
            )

        xs, ys = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
        values = fractal_noise_grid(
            self._p,
            np.ascontiguousarray(xs).ravel(),
            np.ascontiguousarray(ys).ravel(),
            self.octaves, self.scale, self.persistence, self.lacunarity
        )
        return values.reshape(xs.shape)

    def __repr__(self):
        return (f"NoiseField(octaves={self.octaves}, scale={self.scale}, "
                f"persistence={self.persistence}, lacunarity={self.lacunarity})")
