"""
Procedural noise for alpine terrain.

- noise: seeded gradient noise, fbm and ridged noise
- warp: domain warping
- core: FractalComposer and the alpine height function
- grammar: parameter specifications
"""

from .noise import NoiseField, fbm, fbm_grid, ridged_noise, DEFAULT_SEED
from .warp import domain_warp, domain_warp_grid
from .core import FractalComposer
from .grammar import ParameterSpec, ALPINE_PARAMETERS

__all__ = [
    "NoiseField",
    "fbm",
    "fbm_grid",
    "ridged_noise",
    "domain_warp",
    "domain_warp_grid",
    "FractalComposer",
    "ParameterSpec",
    "ALPINE_PARAMETERS",
    "DEFAULT_SEED",
]
