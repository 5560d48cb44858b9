"""
Height field analysis.

Summarizes generated terrain: elevation and slope statistics and how
much of the surface falls into each alpine colour zone.
"""

import numpy as np
from typing import Dict, Any

from .palette import ZONE_NAMES, zone_index


STEEP_SLOPE = 0.4


class HeightmapAnalyzer:
    """
    Analyzes height fields for reporting and sanity checks.
    """

    def __init__(self, steep_slope: float = STEEP_SLOPE):
        self.steep_slope = steep_slope

    def analyze(self, heights: np.ndarray, slopes: np.ndarray) -> Dict[str, Any]:
        """
        Terrain analysis.

        Args:
            heights: Raw heights in [0, 1]
            slopes: Per-vertex slopes in [0, 1]

        Returns:
            Dictionary containing statistics and zone coverage
        """

        heights = np.asarray(heights, dtype=np.float64).ravel()
        slopes = np.asarray(slopes, dtype=np.float64).ravel()

        return {
            "elevation_stats": self._analyze_elevation(heights),
            "slope_analysis": self._analyze_slopes(slopes),
            "zone_coverage": self._zone_coverage(heights),
            "analysis_metadata": {
                "vertex_count": int(heights.size),
                "steep_slope_threshold": self.steep_slope,
            }
        }

    def _analyze_elevation(self, heights: np.ndarray) -> Dict[str, float]:
        """Analyze elevation statistics."""

        return {
            "min": float(np.min(heights)),
            "max": float(np.max(heights)),
            "mean": float(np.mean(heights)),
            "median": float(np.median(heights)),
            "std": float(np.std(heights)),
            "range": float(np.max(heights) - np.min(heights)),
        }

    def _analyze_slopes(self, slopes: np.ndarray) -> Dict[str, float]:
        """Analyze slope characteristics."""

        return {
            "max_slope": float(np.max(slopes)),
            "mean_slope": float(np.mean(slopes)),
            "median_slope": float(np.median(slopes)),
            "steep_area_fraction": float(np.mean(slopes > self.steep_slope)),
        }

    def _zone_coverage(self, heights: np.ndarray) -> Dict[str, float]:
        """Fraction of vertices in each alpine zone."""

        counts = np.bincount(zone_index(heights), minlength=len(ZONE_NAMES))
        return {
            name: float(count) / heights.size
            for name, count in zip(ZONE_NAMES, counts)
        }
