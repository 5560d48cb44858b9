"""
Grid geometry for terrain meshes.

A horizontal plane subdivided into quads, displaced by a height array,
with per-vertex normals recomputed after displacement.
"""

import numpy as np
from typing import Protocol


class GeometryEngine(Protocol):
    """What the height field generator needs from a mesh."""

    positions: np.ndarray
    normals: np.ndarray

    def displace(self, heights: np.ndarray) -> None:
        ...

    def compute_vertex_normals(self) -> np.ndarray:
        ...


class GridGeometry:
    """
    Plane grid in the XZ plane, centred on the origin.

    Vertices are stored row-major: row i runs along +X at
    z = -depth/2 + i * depth/segments. Each quad is split into two
    triangles wound counter-clockwise when seen from +Y.
    """

    def __init__(
        self,
        width: float = 400.0,
        depth: float = 400.0,
        segments: int = 256,
        uv_repeat: float = 8.0
    ):
        if width <= 0 or depth <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{depth}")
        if int(segments) != segments or segments < 1:
            raise ValueError(f"Segment count must be a positive integer, got {segments}")

        self.width = float(width)
        self.depth = float(depth)
        self.segments = int(segments)
        self.uv_repeat = uv_repeat

        self.positions = self._build_positions()
        self.uvs = self._build_uvs()
        self.indices = self._build_indices()
        self.normals = np.tile(np.array([0.0, 1.0, 0.0]), (self.vertex_count, 1))

    @property
    def vertex_count(self) -> int:
        return (self.segments + 1) ** 2

    @property
    def triangle_count(self) -> int:
        return self.segments * self.segments * 2

    def _build_positions(self) -> np.ndarray:
        n = self.segments + 1
        xs = np.linspace(-self.width / 2, self.width / 2, n)
        zs = np.linspace(-self.depth / 2, self.depth / 2, n)
        X, Z = np.meshgrid(xs, zs, indexing="xy")

        positions = np.zeros((n * n, 3), dtype=np.float64)
        positions[:, 0] = X.ravel()
        positions[:, 2] = Z.ravel()
        return positions

    def _build_uvs(self) -> np.ndarray:
        n = self.segments + 1
        coords = np.linspace(0.0, 1.0, n)
        U, V = np.meshgrid(coords, 1.0 - coords, indexing="xy")
        return np.stack([U.ravel(), V.ravel()], axis=1) * self.uv_repeat

    def _build_indices(self) -> np.ndarray:
        n = self.segments + 1
        ix, iz = np.meshgrid(
            np.arange(self.segments), np.arange(self.segments), indexing="xy"
        )
        a = (iz * n + ix).ravel()
        b = ((iz + 1) * n + ix).ravel()
        c = ((iz + 1) * n + ix + 1).ravel()
        d = (iz * n + ix + 1).ravel()

        first = np.stack([a, b, d], axis=1)
        second = np.stack([b, c, d], axis=1)
        # Interleave so each quad's two triangles sit next to each other
        return np.stack([first, second], axis=1).reshape(-1, 3).astype(np.uint32)

    def displace(self, heights: np.ndarray) -> None:
        """Set the y coordinate of every vertex from a flat array."""

        heights = np.asarray(heights, dtype=np.float64).ravel()
        if heights.shape[0] != self.vertex_count:
            raise ValueError(
                f"Expected {self.vertex_count} heights, got {heights.shape[0]}"
            )
        self.positions[:, 1] = heights

    def compute_vertex_normals(self) -> np.ndarray:
        """
        Recompute per-vertex normals.

        Face normals are left unnormalized before accumulation, so larger
        triangles weigh more in the vertex average.
        """

        p = self.positions
        tri = self.indices.astype(np.int64)
        va, vb, vc = p[tri[:, 0]], p[tri[:, 1]], p[tri[:, 2]]
        face_normals = np.cross(vc - vb, va - vb)

        normals = np.zeros_like(p)
        for corner in range(3):
            np.add.at(normals, tri[:, corner], face_normals)

        lengths = np.linalg.norm(normals, axis=1, keepdims=True)
        self.normals = normals / np.maximum(lengths, 1e-12)
        return self.normals
