# planet_fields/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides 3D coherent noise: fractal (fBm) Perlin gradient noise and
cellular (Worley) distance noise. The kernels are pure, stateless functions;
`NoiseField` bundles one seeded, configured generator.

Data Contract:
---------------
- Inputs:
    - p: A pre-shuffled NumPy permutation table (int array of length 512).
    - x, y, z: 1D NumPy float arrays of coordinates.
    - octaves, gain, lacunarity: Standard fractal noise parameters.
- Outputs:
    - A NumPy array of noise values in the range [-1, 1].
- Side Effects: None.
- Invariants: The shape of the output array matches the shape of the inputs.
  Identical seeds and parameters always produce identical values.
================================================================================
"""

from enum import Enum

import numpy as np
from numba import njit

from . import config as DEFAULTS

# The 12 edge directions of a cube, as in improved Perlin noise.
_GRADIENT_VECTORS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
], dtype=np.float64)


class NoiseFamily(Enum):
    GRADIENT = "gradient"
    CELLULAR = "cellular"


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y, z):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 12]
    return g[0] * x + g[1] * y + g[2] * z

@njit
def _perlin_single(p, x, y, z):
    """One octave of improved Perlin noise at a single point."""
    x_floor = np.floor(x)
    y_floor = np.floor(y)
    z_floor = np.floor(z)

    xi = int(x_floor) % 256
    yi = int(y_floor) % 256
    zi = int(z_floor) % 256

    xf = x - x_floor
    yf = y - y_floor
    zf = z - z_floor

    u = _fade(xf)
    v = _fade(yf)
    w = _fade(zf)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    x1 = _lerp(_gradient(p[aa], xf, yf, zf), _gradient(p[ba], xf - 1, yf, zf), u)
    x2 = _lerp(_gradient(p[ab], xf, yf - 1, zf), _gradient(p[bb], xf - 1, yf - 1, zf), u)
    y1 = _lerp(x1, x2, v)

    x1 = _lerp(_gradient(p[aa + 1], xf, yf, zf - 1), _gradient(p[ba + 1], xf - 1, yf, zf - 1), u)
    x2 = _lerp(_gradient(p[ab + 1], xf, yf - 1, zf - 1), _gradient(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
    y2 = _lerp(x1, x2, v)

    return _lerp(y1, y2, w)

@njit
def perlin_noise_3d(p, x, y, z, octaves=1, gain=0.5, lacunarity=2.0):
    """
    Generate fractal 3D Perlin noise using a pre-computed permutation table.
    The octave sum is divided by the total amplitude so that the result stays
    within [-1, 1] regardless of the octave count.
    """
    n = x.shape[0]
    total_noise = np.empty(n)

    for i in range(n):
        noise_val = 0.0
        amplitude = 1.0
        frequency = 1.0
        amplitude_sum = 0.0

        for _ in range(octaves):
            noise_val += _perlin_single(
                p, x[i] * frequency, y[i] * frequency, z[i] * frequency
            ) * amplitude
            amplitude_sum += amplitude
            amplitude *= gain
            frequency *= lacunarity

        value = noise_val / amplitude_sum
        total_noise[i] = min(1.0, max(-1.0, value))

    return total_noise

@njit
def cellular_noise_3d(p, x, y, z):
    """
    Generate 3D cellular noise. Every unit cell holds one feature point jittered
    by the permutation table; the result is the distance to the nearest feature
    point (F1), clamped to 1 and mapped to [-1, 1]. Values near -1 lie close to
    a cell center.
    """
    n = x.shape[0]
    total_noise = np.empty(n)

    for i in range(n):
        cx = np.floor(x[i])
        cy = np.floor(y[i])
        cz = np.floor(z[i])
        nearest = 1e9

        for dx in range(-1, 2):
            for dy in range(-1, 2):
                for dz in range(-1, 2):
                    gx = cx + dx
                    gy = cy + dy
                    gz = cz + dz
                    h = p[p[p[int(gx) % 256] + int(gy) % 256] + int(gz) % 256]
                    fx = gx + p[h] / 255.0
                    fy = gy + p[h + 1] / 255.0
                    fz = gz + p[h + 2] / 255.0
                    dist = np.sqrt((x[i] - fx) ** 2 + (y[i] - fy) ** 2 + (z[i] - fz) ** 2)
                    if dist < nearest:
                        nearest = dist

        total_noise[i] = 2.0 * min(nearest, 1.0) - 1.0

    return total_noise


def build_permutation_table(seed: int) -> np.ndarray:
    """Shuffles 0..255 deterministically from the seed and doubles the table."""
    p = np.arange(256, dtype=np.int64)
    rng = np.random.default_rng(seed)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


class NoiseField:
    """
    A single seeded, configured coherent-noise generator sampled in 3D.
    """
    def __init__(self, family: NoiseFamily, seed: int, frequency: float,
                 octaves: int = 1, lacunarity: float = 2.0, gain: float = 0.5):
        self.family = family
        self.seed = seed
        self.frequency = float(frequency)
        self.octaves = int(octaves)
        self.lacunarity = float(lacunarity)
        self.gain = float(gain)

        self._p = build_permutation_table(seed)
        # Translating the sample space per seed keeps symmetric points such
        # as the poles off the integer lattice, where Perlin noise is zero.
        rng = np.random.default_rng(seed + 1)
        span = DEFAULTS.NOISE_COORDINATE_OFFSET_RANGE
        self._offset = rng.uniform(-span, span, 3)

    def sample(self, x, y, z) -> np.ndarray:
        """Samples the field at sphere coordinates. Inputs broadcast together."""
        bx, by, bz = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        shape = bx.shape
        fx = np.ascontiguousarray(bx.ravel() * self.frequency + self._offset[0])
        fy = np.ascontiguousarray(by.ravel() * self.frequency + self._offset[1])
        fz = np.ascontiguousarray(bz.ravel() * self.frequency + self._offset[2])

        if self.family is NoiseFamily.CELLULAR:
            values = cellular_noise_3d(self._p, fx, fy, fz)
        else:
            values = perlin_noise_3d(self._p, fx, fy, fz, self.octaves, self.gain, self.lacunarity)
        return values.reshape(shape)

    def __repr__(self):
        return (f"NoiseField({self.family.value}, seed={self.seed}, frequency={self.frequency}, "
                f"octaves={self.octaves})")
