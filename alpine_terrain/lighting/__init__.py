"""
Day/night lighting.

- state: immutable lighting states and interpolation
- day_night: the transition state machine
- uniforms: scene sinks that consume blended states
"""

from .state import LightingState, DAY_STATE, NIGHT_STATE, lerp_state
from .uniforms import SceneStateSink, SceneUniforms
from .day_night import DayNightCycle, TimeOfDay, ease_in_out_cubic, DEFAULT_TRANSITION_DURATION

__all__ = [
    "LightingState",
    "DAY_STATE",
    "NIGHT_STATE",
    "lerp_state",
    "SceneStateSink",
    "SceneUniforms",
    "DayNightCycle",
    "TimeOfDay",
    "ease_in_out_cubic",
    "DEFAULT_TRANSITION_DURATION",
]
