"""
Terrain engine.

This module provides:
- Grid geometry with displacement and vertex normals
- Height field generation from the alpine height function
- Terrain colouring and height field analysis
"""

from .geometry import GeometryEngine, GridGeometry
from .heightfield import HeightField, HeightFieldGenerator
from .heightmap_analyzer import HeightmapAnalyzer
from .palette import terrain_colors, shade_vertices, boundary_variation, ZONE_NAMES

__all__ = [
    "GeometryEngine",
    "GridGeometry",
    "HeightField",
    "HeightFieldGenerator",
    "HeightmapAnalyzer",
    "terrain_colors",
    "shade_vertices",
    "boundary_variation",
    "ZONE_NAMES",
]
