"""
Domain warping for terrain generation.

Domain warping distorts the coordinate space before noise is sampled,
which breaks up the grid-aligned look of plain fbm.
"""

from typing import Tuple

import numpy as np

from .noise import NoiseField, fbm, fbm_grid


# Offset of the second warp sample
WARP_OFFSET = (5.2, 1.3)
WARP_OCTAVES = 4


def domain_warp(
    field: NoiseField,
    x,
    y,
    warp_strength: float = 0.5,
    scale: float = 0.5
) -> Tuple:
    """
    Warp coordinates with two fbm samples.

    Args:
        field: Noise source
        x, y: Input coordinates, scalars or same-shaped arrays
        warp_strength: How far coordinates are pushed
        scale: Base frequency of the warp noise

    Returns:
        Tuple of (warped_x, warped_y)
    """

    warp_x = fbm(field, x, y, WARP_OCTAVES, 0.5, 2.0, scale)
    warp_y = fbm(
        field,
        x + WARP_OFFSET[0],
        y + WARP_OFFSET[1],
        WARP_OCTAVES, 0.5, 2.0, scale
    )

    return x + warp_x * warp_strength, y + warp_y * warp_strength


def domain_warp_grid(
    field: NoiseField,
    xs: np.ndarray,
    ys: np.ndarray,
    warp_strength: float = 0.5,
    scale: float = 0.5
) -> Tuple[np.ndarray, np.ndarray]:
    """
    domain_warp over the lattice xs x ys.

    Both warp samples stay on a (shifted) lattice, so they are taken
    with fbm_grid. Returns two (len(ys), len(xs)) arrays.
    """

    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    X, Y = np.meshgrid(xs, ys, indexing="xy")

    warp_x = fbm_grid(field, xs, ys, WARP_OCTAVES, 0.5, 2.0, scale)
    warp_y = fbm_grid(
        field,
        xs + WARP_OFFSET[0],
        ys + WARP_OFFSET[1],
        WARP_OCTAVES, 0.5, 2.0, scale
    )

    return X + warp_x * warp_strength, Y + warp_y * warp_strength
