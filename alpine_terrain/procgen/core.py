"""
Alpine height composition.

Combines fbm, ridged noise and domain warping into the single height
function used for terrain generation.
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from .grammar import ALPINE_PARAMETERS
from .noise import NoiseField, fbm, fbm_grid, ridged_noise
from .warp import domain_warp, domain_warp_grid


logger = logging.getLogger(__name__)


class FractalComposer:
    """
    Builds fractal signals on top of a NoiseField.

    Stateless apart from the noise source and its constants:
    - fbm / ridged_noise / domain_warp bound to the noise field
    - alpine_height: the composite terrain height in [0, 1]
    - alpine_height_grid: the same over a lattice of coordinates
    """

    def __init__(
        self,
        field: Optional[NoiseField] = None,
        parameters: Optional[Dict[str, float]] = None
    ):
        self.field = field if field is not None else NoiseField()
        self.parameters = ALPINE_PARAMETERS.extract_params(parameters)
        logger.debug("FractalComposer using %r with %s", self.field, self.parameters)

    def fbm(
        self,
        x: float,
        y: float,
        octaves: int = 6,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        scale: float = 1.0
    ) -> float:
        return fbm(self.field, x, y, octaves, persistence, lacunarity, scale)

    def ridged_noise(
        self,
        x: float,
        y: float,
        octaves: int = 6,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        scale: float = 1.0
    ) -> float:
        return ridged_noise(self.field, x, y, octaves, persistence, lacunarity, scale)

    def domain_warp(
        self,
        x: float,
        y: float,
        warp_strength: float = 0.5,
        scale: float = 0.5
    ) -> Tuple[float, float]:
        return domain_warp(self.field, x, y, warp_strength, scale)

    def _layer(self, name: str, x, y, ridged: bool = False):
        p = self.parameters
        func = ridged_noise if ridged else fbm
        return func(
            self.field, x, y,
            p[f"{name}_octaves"],
            p[f"{name}_persistence"],
            p[f"{name}_lacunarity"],
            p[f"{name}_scale"]
        )

    def _layer_grid(self, name: str, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        p = self.parameters
        return fbm_grid(
            self.field, xs, ys,
            p[f"{name}_octaves"],
            p[f"{name}_persistence"],
            p[f"{name}_lacunarity"],
            p[f"{name}_scale"]
        )

    def _compose(self, base_height, ridges, large_scale, detail):
        """Blend the four layers and shape the result into [0, 1]."""

        p = self.parameters

        ridge_blend = np.maximum(0.0, large_scale * 0.5 + 0.5)

        height = (
            base_height * (1.0 - ridge_blend * p["base_damping"])
            + ridges * ridge_blend * p["ridge_weight"]
        )

        # Fine detail
        height = height + detail * p["detail_amplitude"]

        # [-1, 1] -> [0, 1]
        height = (height + 1.0) * 0.5

        # Sharpen peaks
        height = np.maximum(0.0, height) ** p["peak_exponent"]

        # Flatten valley floors
        threshold = p["valley_threshold"]
        flatten = p["valley_flatten"]
        height = np.where(
            height < threshold,
            height * flatten + threshold * (1.0 - flatten),
            height
        )

        return np.clip(height, 0.0, 1.0)

    def alpine_height(self, x: float, y: float) -> float:
        """
        Height of alpine terrain at normalized coordinates.

        Smooth fbm valleys blended with ridged peaks, where a large-scale
        fbm decides how ridged each region is.

        Args:
            x, y: Coordinates, normally in [0, 1]

        Returns:
            Height in [0, 1]
        """

        p = self.parameters

        # Warp for organic shapes
        wx, wy = self.domain_warp(x, y, p["warp_strength"], p["warp_scale"])

        base_height = self._layer("base", wx, wy)
        ridges = self._layer("ridge", wx, wy, ridged=True)

        # Large-scale variation uses the unwarped coordinates
        large_scale = self._layer("large", x, y)

        f = p["detail_frequency"]
        detail = self._layer("detail", x * f, y * f)

        return float(self._compose(base_height, ridges, large_scale, detail))

    def alpine_height_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        alpine_height over the lattice xs x ys.

        Warp, large-scale and detail layers are sampled as lattices; only
        the base and ridge layers need the warped points one by one.

        Returns:
            Heights of shape (len(ys), len(xs)) in [0, 1]
        """

        p = self.parameters
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)

        wx, wy = domain_warp_grid(self.field, xs, ys, p["warp_strength"], p["warp_scale"])

        base_height = self._layer("base", wx, wy)
        ridges = self._layer("ridge", wx, wy, ridged=True)

        large_scale = self._layer_grid("large", xs, ys)

        f = p["detail_frequency"]
        detail = self._layer_grid("detail", xs * f, ys * f)

        return self._compose(base_height, ridges, large_scale, detail)

    def __call__(self, x: float, y: float) -> float:
        return self.alpine_height(x, y)
