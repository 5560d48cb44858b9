"""
Height field generation for alpine terrain.

Samples the alpine height function over a grid geometry, displaces the
vertices and derives per-vertex slope from the recomputed normals.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from tqdm import tqdm

from ..procgen import FractalComposer, NoiseField, DEFAULT_SEED
from .geometry import GeometryEngine, GridGeometry


logger = logging.getLogger(__name__)

# Grid rows sampled per batch
ROW_CHUNK = 16


def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class HeightField:
    """Generated terrain: one entry per grid vertex, all arrays read-only."""

    heights: np.ndarray    # raw heights in [0, 1]
    slopes: np.ndarray     # 0 = flat, 1 = vertical
    positions: np.ndarray  # displaced vertex positions (N, 3)
    normals: np.ndarray    # unit vertex normals (N, 3)
    uvs: np.ndarray
    indices: np.ndarray
    height_scale: float

    @property
    def vertex_count(self) -> int:
        return int(self.heights.shape[0])

    def grid(self) -> np.ndarray:
        """Heights as a square (rows, cols) array, rows along +Z."""
        n = int(round(np.sqrt(self.vertex_count)))
        return self.heights.reshape(n, n)


class HeightFieldGenerator:
    """
    Generates alpine terrain height data.

    Owns the generated height and slope arrays; callers receive them
    as read-only copies inside a HeightField.
    """

    def __init__(
        self,
        width: float = 400.0,
        depth: float = 400.0,
        segments: int = 256,
        height_scale: float = 120.0,
        composer: Optional[FractalComposer] = None,
        seed: int = DEFAULT_SEED,
        show_progress: bool = False
    ):
        if width <= 0 or depth <= 0:
            raise ValueError(f"Terrain size must be positive, got {width}x{depth}")
        if int(segments) != segments or segments < 1:
            raise ValueError(f"Segment count must be a positive integer, got {segments}")

        self.width = float(width)
        self.depth = float(depth)
        self.segments = int(segments)
        self.height_scale = float(height_scale)
        self.composer = composer if composer is not None else FractalComposer(NoiseField(seed))
        self.show_progress = show_progress

        self.height_field: Optional[HeightField] = None

    def normalize(self, x: float, z: float):
        """World (x, z) -> terrain coordinates, [0, 1] on the terrain."""
        return (x + self.width / 2) / self.width, (z + self.depth / 2) / self.depth

    def _sample_heights(self, nx: np.ndarray, nz: np.ndarray) -> np.ndarray:
        """Alpine height at every (nx, nz) pair."""

        xs, ix = np.unique(nx, return_inverse=True)
        zs, iz = np.unique(nz, return_inverse=True)
        ix, iz = ix.ravel(), iz.ravel()
        is_lattice = (
            xs.size * zs.size == nx.size
            and np.unique(iz * xs.size + ix).size == nx.size
        )

        if is_lattice:
            grid = np.empty((zs.size, xs.size), dtype=np.float64)
            with tqdm(total=zs.size, desc="Sampling terrain", unit="row",
                      disable=not self.show_progress) as pbar:
                for start in range(0, zs.size, ROW_CHUNK):
                    rows = zs[start:start + ROW_CHUNK]
                    grid[start:start + rows.size] = self.composer.alpine_height_grid(xs, rows)
                    pbar.update(rows.size)
            return grid[iz, ix]

        # Irregular layout: one sample per vertex
        logger.debug("Vertices do not form a lattice, sampling one by one")
        heights = np.empty(nx.size, dtype=np.float64)
        for i in tqdm(range(nx.size), desc="Sampling terrain", unit="vtx",
                      disable=not self.show_progress):
            heights[i] = self.composer.alpine_height(nx[i], nz[i])
        return heights

    def generate(self, geometry: Optional[GeometryEngine] = None) -> HeightField:
        """
        Generate the height field.

        Args:
            geometry: Grid to displace; a GridGeometry matching this
                generator's size is built when omitted

        Returns:
            HeightField with heights, slopes and the displaced mesh
        """

        if geometry is None:
            geometry = GridGeometry(self.width, self.depth, self.segments)

        start_time = time.time()
        positions = geometry.positions
        vertex_count = positions.shape[0]

        logger.info(
            "Sampling %d vertices (%gx%g, %d segments)",
            vertex_count, self.width, self.depth, self.segments
        )

        nx, nz = self.normalize(positions[:, 0], positions[:, 2])
        heights = self._sample_heights(nx, nz)

        # Displace, then let the geometry recompute normals
        geometry.displace(heights * self.height_scale)
        normals = geometry.compute_vertex_normals()

        slopes = 1.0 - np.abs(normals[:, 1])

        self.height_field = HeightField(
            heights=_read_only(heights),
            slopes=_read_only(slopes),
            positions=_read_only(geometry.positions),
            normals=_read_only(normals),
            uvs=_read_only(getattr(geometry, "uvs", np.zeros((vertex_count, 2)))),
            indices=_read_only(getattr(geometry, "indices", np.zeros((0, 3), dtype=np.uint32))),
            height_scale=self.height_scale
        )

        logger.info(
            "Generated height field in %.2fs (height %.3f..%.3f)",
            time.time() - start_time, heights.min(), heights.max()
        )
        return self.height_field

    def get_height_at(self, x: float, z: float) -> float:
        """
        Terrain height at a world position.

        Recomputes the height function rather than reading the grid.
        Returns exactly 0.0 outside the terrain.
        """

        nx, nz = self.normalize(x, z)
        if nx < 0 or nx > 1 or nz < 0 or nz > 1:
            return 0.0

        return self.composer.alpine_height(nx, nz) * self.height_scale

    def save_heightmap(self, output_path: str, format: str = "png") -> Path:
        """
        Save the generated heights to file.

        Args:
            output_path: Output file path
            format: File format ("png", "npy", "tiff")
        """

        if self.height_field is None:
            raise RuntimeError("No height field generated yet; call generate() first")

        heightmap = self.height_field.grid()
        output_path = Path(output_path)

        if format == "png":
            from PIL import Image
            # Heights are already in [0, 1]; 16-bit for precision
            heightmap_16bit = np.round(heightmap * 65535).astype(np.uint16)
            Image.fromarray(heightmap_16bit).save(output_path)

        elif format == "npy":
            np.save(output_path, heightmap)

        elif format == "tiff":
            from PIL import Image
            # 32-bit float TIFF
            Image.fromarray(heightmap.astype(np.float32)).save(output_path)

        else:
            raise ValueError(f"Unsupported format: {format}")

        logger.info("Saved heightmap to %s", output_path)
        return output_path
