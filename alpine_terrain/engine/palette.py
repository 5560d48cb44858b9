"""
Alpine terrain colouring.

CPU version of the terrain shader's colour zones: altitude bands from
valley grass to snow, rock exposed on steep slopes, a darker blue-shifted
palette at night, lit by the sun and ambient terms of a LightingState.
"""

import numpy as np
from typing import Optional

from ..procgen import NoiseField, fbm


# Day palette
DEEP_GRASS = np.array([0.15, 0.32, 0.12])
GRASS = np.array([0.22, 0.42, 0.15])
LIGHT_GRASS = np.array([0.35, 0.52, 0.22])
DRY_GRASS = np.array([0.45, 0.42, 0.25])
ROCK_DARK = np.array([0.28, 0.26, 0.24])
ROCK = np.array([0.42, 0.40, 0.38])
ROCK_LIGHT = np.array([0.55, 0.53, 0.50])
SNOW = np.array([0.95, 0.97, 1.0])
ICE = np.array([0.85, 0.92, 0.98])

# Night palette
NIGHT_GRASS = np.array([0.05, 0.08, 0.12])
NIGHT_ROCK = np.array([0.12, 0.12, 0.15])
NIGHT_SNOW = np.array([0.35, 0.40, 0.55])

ZONE_NAMES = ["valley", "grass", "alpine", "rock", "high_rock", "snow"]

# Zone line: (base height, share of the boundary variation it follows)
ZONE_LINES = [
    (0.20, 1.0),  # valley
    (0.35, 1.0),  # grass
    (0.55, 0.8),  # tree line
    (0.72, 0.5),  # rock
    (0.82, 0.3),  # snow
]

MAX_VARIATION = 0.15


def smoothstep(edge0, edge1, x):
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def _mix(a, b, t):
    t = np.asarray(t)
    if t.ndim == 1:
        t = t[:, None]
    return a + (b - a) * t


def zone_lines(heights: np.ndarray, variation: Optional[np.ndarray] = None):
    """Per-vertex zone boundaries, shifted by the boundary variation."""

    if variation is None:
        variation = np.zeros_like(heights)
    return [base + share * variation for base, share in ZONE_LINES]


def zone_index(heights: np.ndarray, variation: Optional[np.ndarray] = None) -> np.ndarray:
    """Index into ZONE_NAMES for every vertex."""

    heights = np.asarray(heights, dtype=np.float64)
    index = np.zeros(heights.shape, dtype=np.int64)
    for line in zone_lines(heights, variation):
        index += heights >= line
    return index


def boundary_variation(
    field: NoiseField,
    uvs: np.ndarray,
    frequency: float = 4.0,
    octaves: int = 4
) -> np.ndarray:
    """Noise in [0, MAX_VARIATION] that roughens the zone boundaries."""

    uvs = np.asarray(uvs, dtype=np.float64)
    values = fbm(field, uvs[:, 0] * frequency, uvs[:, 1] * frequency, octaves)
    return (values * 0.5 + 0.5) * MAX_VARIATION


def terrain_colors(
    heights: np.ndarray,
    slopes: np.ndarray,
    day_night_mix: float = 0.0,
    variation: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Base (unlit) colour of every vertex.

    Args:
        heights: Raw heights in [0, 1]
        slopes: Slopes in [0, 1]
        day_night_mix: 0 = day palette, 1 = night palette
        variation: Optional boundary variation in [0, MAX_VARIATION]

    Returns:
        (N, 3) RGB array
    """

    h = np.asarray(heights, dtype=np.float64)
    slope = np.asarray(slopes, dtype=np.float64)
    if variation is None:
        variation = np.zeros_like(h)
    detail = variation / MAX_VARIATION

    valley, grass, tree, rock, snow = zone_lines(h, variation)

    zones = [
        _mix(DEEP_GRASS, GRASS, smoothstep(0.0, valley, h)),
        _mix(GRASS, _mix(GRASS, LIGHT_GRASS, detail), smoothstep(valley, grass, h)),
        _mix(LIGHT_GRASS, _mix(LIGHT_GRASS, DRY_GRASS, detail), smoothstep(grass, tree, h)),
        _mix(DRY_GRASS, _mix(ROCK_DARK, ROCK, detail), smoothstep(tree, rock, h)),
        _mix(ROCK, _mix(ROCK, ROCK_LIGHT, detail), smoothstep(rock, snow, h)),
        _mix(ROCK_LIGHT, _mix(ICE, SNOW, detail * 0.5 + 0.5), smoothstep(snow, 1.0, h)),
    ]
    index = zone_index(h, variation)
    day = np.choose(index[:, None], zones)

    # Steep slopes show rock, less so on snow
    rock_factor = smoothstep(0.4, 0.7, slope)
    rock_factor = rock_factor * (1.0 - smoothstep(snow - 0.1, snow + 0.1, h) * 0.7)
    day = _mix(day, _mix(ROCK_DARK, ROCK, detail), rock_factor * 0.8)

    night = np.where(
        (h < tree)[:, None],
        NIGHT_GRASS,
        np.where(
            (h < snow)[:, None],
            _mix(NIGHT_GRASS, NIGHT_ROCK, smoothstep(tree, snow, h)),
            _mix(NIGHT_ROCK, NIGHT_SNOW, smoothstep(snow, 1.0, h))
        )
    )

    return _mix(day, night, np.full(h.shape, float(day_night_mix)))


def shade_vertices(
    colors: np.ndarray,
    normals: np.ndarray,
    slopes: np.ndarray,
    state
) -> np.ndarray:
    """Apply sun and ambient light of a LightingState to base colours."""

    sun_direction = np.asarray(state.sun_direction, dtype=np.float64)
    sun_direction = sun_direction / np.linalg.norm(sun_direction)

    n_dot_l = np.maximum(np.asarray(normals) @ sun_direction, 0.0)
    # Steep slopes are darker
    ao = 1.0 - np.asarray(slopes) * 0.3

    direct = np.asarray(state.sun_color) * state.sun_intensity * n_dot_l[:, None]
    ambient = np.asarray(state.ambient_color) * state.ambient_intensity * ao[:, None]

    return np.clip(np.asarray(colors) * (direct + ambient), 0.0, 1.0)
