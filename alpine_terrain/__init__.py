"""
Alpine terrain: procedural mountains with a day/night lighting cycle.

- procgen: seeded noise, fbm, ridged noise, domain warp, alpine height
- engine: grid geometry, height field generation, colouring, analysis
- lighting: lighting states and the day/night transition state machine
- controls: keyboard edge detection
- render: optional Raylib viewer
"""

from .procgen import NoiseField, FractalComposer
from .engine import HeightFieldGenerator, GridGeometry, HeightmapAnalyzer
from .lighting import DayNightCycle, LightingState, SceneUniforms, TimeOfDay
from .controls import InputHandler, KeyCodes

__version__ = "0.1.0"

__all__ = [
    "NoiseField",
    "FractalComposer",
    "HeightFieldGenerator",
    "GridGeometry",
    "HeightmapAnalyzer",
    "DayNightCycle",
    "LightingState",
    "SceneUniforms",
    "TimeOfDay",
    "InputHandler",
    "KeyCodes",
]
