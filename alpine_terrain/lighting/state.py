"""
Lighting states for the day/night cycle.

A LightingState is an immutable snapshot of every lighting parameter the
scene needs: sun, ambient and hemisphere lights, sky gradient, fog,
terrain shading mix and renderer exposure.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Tuple


Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float]

VECTOR = "vector"
DIRECTION = "direction"
COLOR = "color"
SCALAR = "scalar"


def _kind(kind: str):
    return field(metadata={"kind": kind})


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp3(a: Vec3, b: Vec3, t: float) -> Vec3:
    return (lerp(a[0], b[0], t), lerp(a[1], b[1], t), lerp(a[2], b[2], t))


def normalize(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


@dataclass(frozen=True)
class LightingState:
    """Complete set of lighting parameters for one moment of the cycle."""

    # Sun (or moon) placement
    sun_position: Vec3 = _kind(VECTOR)
    sun_direction: Vec3 = _kind(DIRECTION)

    # Sun light
    sun_color: Color = _kind(COLOR)
    sun_intensity: float = _kind(SCALAR)

    # Ambient light
    ambient_color: Color = _kind(COLOR)
    ambient_intensity: float = _kind(SCALAR)

    # Hemisphere light
    hemi_sky_color: Color = _kind(COLOR)
    hemi_ground_color: Color = _kind(COLOR)
    hemi_intensity: float = _kind(SCALAR)

    # Sky dome
    sky_top_color: Color = _kind(COLOR)
    sky_middle_color: Color = _kind(COLOR)
    sky_bottom_color: Color = _kind(COLOR)
    sky_horizon_color: Color = _kind(COLOR)
    sky_sun_color: Color = _kind(COLOR)
    sky_sun_intensity: float = _kind(SCALAR)
    sky_star_intensity: float = _kind(SCALAR)

    # Fog
    fog_color: Color = _kind(COLOR)
    fog_density: float = _kind(SCALAR)

    # Terrain shader day/night palette mix
    terrain_day_night_mix: float = _kind(SCALAR)

    # Renderer tone mapping
    exposure: float = _kind(SCALAR)


def lerp_state(start: LightingState, end: LightingState, t: float) -> LightingState:
    """
    Blend two states at factor t.

    Vectors and colours are interpolated per component, scalars linearly;
    directions are renormalized after interpolation. Returns a new state.
    """

    values = {}
    for f in fields(LightingState):
        a = getattr(start, f.name)
        b = getattr(end, f.name)
        kind = f.metadata["kind"]

        if kind == SCALAR:
            values[f.name] = lerp(a, b, t)
        elif kind == DIRECTION:
            values[f.name] = normalize(lerp3(a, b, t))
        else:
            values[f.name] = lerp3(a, b, t)

    return LightingState(**values)


DAY_STATE = LightingState(
    # High in the sky
    sun_position=(100.0, 200.0, 80.0),
    sun_direction=normalize((0.4, 0.8, 0.3)),
    sun_color=(1.0, 0.98, 0.92),
    sun_intensity=2.0,
    ambient_color=(0.5, 0.6, 0.8),
    ambient_intensity=0.5,
    hemi_sky_color=(0.6, 0.75, 0.9),
    hemi_ground_color=(0.3, 0.4, 0.25),
    hemi_intensity=0.4,
    sky_top_color=(0.15, 0.35, 0.75),
    sky_middle_color=(0.4, 0.6, 0.85),
    sky_bottom_color=(0.5, 0.55, 0.6),
    sky_horizon_color=(0.65, 0.78, 0.88),
    sky_sun_color=(1.0, 0.98, 0.92),
    sky_sun_intensity=1.2,
    sky_star_intensity=0.0,
    fog_color=(0.6, 0.75, 0.9),
    fog_density=0.0008,
    terrain_day_night_mix=0.0,
    exposure=1.0,
)

NIGHT_STATE = LightingState(
    # Moon, opposite side and lower
    sun_position=(-80.0, 100.0, -60.0),
    sun_direction=normalize((-0.3, 0.6, -0.3)),
    sun_color=(0.6, 0.7, 0.9),
    sun_intensity=0.3,
    ambient_color=(0.1, 0.12, 0.2),
    ambient_intensity=0.3,
    hemi_sky_color=(0.08, 0.1, 0.2),
    hemi_ground_color=(0.02, 0.03, 0.05),
    hemi_intensity=0.2,
    sky_top_color=(0.01, 0.01, 0.05),
    sky_middle_color=(0.03, 0.04, 0.1),
    sky_bottom_color=(0.02, 0.02, 0.05),
    sky_horizon_color=(0.06, 0.07, 0.12),
    sky_sun_color=(0.8, 0.85, 1.0),
    sky_sun_intensity=0.5,
    sky_star_intensity=1.0,
    fog_color=(0.05, 0.06, 0.1),
    fog_density=0.0015,
    terrain_day_night_mix=1.0,
    exposure=0.6,
)
