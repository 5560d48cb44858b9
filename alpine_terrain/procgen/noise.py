"""
Noise functions for terrain generation.

Seeded gradient noise and the fractal sums built on top of it:
- NoiseField: OpenSimplex gradient noise bound to a fixed seed
- fbm: fractional Brownian motion
- ridged_noise: ridged multifractal noise

fbm and ridged_noise take scalars or same-shaped coordinate arrays;
the *_grid variants sample the lattice spanned by two axis vectors,
which opensimplex evaluates in one compiled call.
"""

from typing import Callable, Optional

import numpy as np
from opensimplex import OpenSimplex


DEFAULT_SEED = 42


class NoiseField:
    """
    Seeded 2D gradient noise.

    The seed is fixed at construction; every sample is a pure function
    of (x, y) and that seed, so two fields built with the same seed
    return identical values.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = int(seed)
        self._generator = OpenSimplex(seed=self.seed)

    def noise(self, x: float, y: float) -> float:
        """Sample noise at (x, y). Returns a value in [-1, 1]."""
        return self._generator.noise2(x, y)

    def noise_array(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Sample noise at paired coordinates; output has the broadcast shape."""

        x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
        noise2 = self._generator.noise2
        values = np.fromiter(
            (noise2(a, b) for a, b in zip(x.ravel().tolist(), y.ravel().tolist())),
            dtype=np.float64,
            count=x.size
        )
        return values.reshape(x.shape)

    def noise_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Sample the lattice xs x ys. Returns shape (len(ys), len(xs))."""

        xs = np.ascontiguousarray(xs, dtype=np.float64).ravel()
        ys = np.ascontiguousarray(ys, dtype=np.float64).ravel()
        return self._generator.noise2array(xs, ys)

    def sample(self, x, y):
        """noise() for scalars, noise_array() for arrays."""
        if np.ndim(x) == 0 and np.ndim(y) == 0:
            return self.noise(x, y)
        return self.noise_array(x, y)

    def __call__(self, x: float, y: float) -> float:
        return self.noise(x, y)

    def __repr__(self) -> str:
        return f"NoiseField(seed={self.seed})"


def _ridge(n):
    # Invert the absolute value, then square to sharpen
    n = 1.0 - abs(n)
    return n * n


def _accumulate(
    sample: Callable[[float], object],
    octaves: int,
    persistence: float,
    lacunarity: float,
    scale: float,
    fold: Optional[Callable] = None
):
    """Amplitude-normalized octave sum; sample(frequency) returns raw noise."""

    total = 0.0
    frequency = scale
    amplitude = 1.0
    max_value = 0.0

    for _ in range(octaves):
        n = sample(frequency)
        if fold is not None:
            n = fold(n)
        total = total + n * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return total / max_value


def fbm(
    field: NoiseField,
    x,
    y,
    octaves: int = 6,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 1.0
):
    """
    Fractional Brownian motion.

    Args:
        field: Noise source
        x, y: Sample coordinates, scalars or same-shaped arrays
        octaves: Number of noise layers
        persistence: Amplitude decay per octave
        lacunarity: Frequency multiplier per octave
        scale: Base frequency

    Returns:
        Noise value(s) in [-1, 1]
    """

    return _accumulate(
        lambda f: field.sample(x * f, y * f),
        octaves, persistence, lacunarity, scale
    )


def fbm_grid(
    field: NoiseField,
    xs: np.ndarray,
    ys: np.ndarray,
    octaves: int = 6,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 1.0
) -> np.ndarray:
    """fbm over the lattice xs x ys, shape (len(ys), len(xs))."""

    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    return _accumulate(
        lambda f: field.noise_grid(xs * f, ys * f),
        octaves, persistence, lacunarity, scale
    )


def ridged_noise(
    field: NoiseField,
    x,
    y,
    octaves: int = 6,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    scale: float = 1.0
):
    """
    Ridged multifractal noise (sharp mountain ridges).

    Same accumulation as fbm, but every octave is folded with
    (1 - |n|)^2 so the zero crossings of the noise become crests.

    Returns:
        Noise value(s) in [0, 1]
    """

    return _accumulate(
        lambda f: field.sample(x * f, y * f),
        octaves, persistence, lacunarity, scale,
        fold=_ridge
    )
