"""
Scene state sinks.

A SceneStateSink receives a complete LightingState every active frame.
SceneUniforms is the renderer-independent sink: it maps a state onto the
light parameters, sky and terrain shader uniforms, fog and exposure that
a renderer reads back.
"""

from typing import Any, Dict, Optional, Protocol

from .state import LightingState, normalize


SUN_SIZE = 1.5


class SceneStateSink(Protocol):
    def apply(self, state: LightingState) -> None:
        ...


class SceneUniforms:
    """
    Flat view of scene lighting parameters.

    - lights: sun, ambient and hemisphere light parameters
    - sky: sky dome shader uniforms
    - terrain: terrain shader uniforms
    - fog: colour and density
    - exposure: tone mapping exposure
    """

    def __init__(self):
        self.lights: Dict[str, Dict[str, Any]] = {}
        self.sky: Dict[str, Any] = {"uSunSize": SUN_SIZE, "uTime": 0.0}
        self.terrain: Dict[str, Any] = {"uTime": 0.0}
        self.fog: Dict[str, Any] = {}
        self.exposure: float = 1.0

        self.state: Optional[LightingState] = None
        self.apply_count = 0

    def apply(self, state: LightingState) -> None:
        self.lights = {
            "sun": {
                "position": state.sun_position,
                "color": state.sun_color,
                "intensity": state.sun_intensity,
            },
            "ambient": {
                "color": state.ambient_color,
                "intensity": state.ambient_intensity,
            },
            "hemisphere": {
                "sky_color": state.hemi_sky_color,
                "ground_color": state.hemi_ground_color,
                "intensity": state.hemi_intensity,
            },
        }

        self.sky.update({
            "uTopColor": state.sky_top_color,
            "uMiddleColor": state.sky_middle_color,
            "uBottomColor": state.sky_bottom_color,
            "uHorizonColor": state.sky_horizon_color,
            "uSunColor": state.sky_sun_color,
            "uSunPosition": state.sun_position,
            "uSunIntensity": state.sky_sun_intensity,
            "uStarIntensity": state.sky_star_intensity,
        })

        self.fog = {
            "color": state.fog_color,
            "density": state.fog_density,
        }

        self.terrain.update({
            "uSunDirection": normalize(state.sun_direction),
            "uSunColor": state.sun_color,
            "uSunIntensity": state.sun_intensity,
            "uAmbientColor": state.ambient_color,
            "uAmbientIntensity": state.ambient_intensity,
            "uDayNightMix": state.terrain_day_night_mix,
            "uFogColor": state.fog_color,
            "uFogDensity": state.fog_density,
        })

        self.exposure = state.exposure
        self.state = state
        self.apply_count += 1

    def set_time(self, elapsed_time: float) -> None:
        """Time uniform for star twinkle and snow sparkle."""
        self.sky["uTime"] = elapsed_time
        self.terrain["uTime"] = elapsed_time
