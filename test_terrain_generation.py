#!/usr/bin/env python3
"""
Tests for grid geometry, height field generation, colouring and analysis.
"""

import numpy as np
import pytest

from alpine_terrain.engine import (
    GridGeometry,
    HeightFieldGenerator,
    HeightmapAnalyzer,
    ZONE_NAMES,
    boundary_variation,
    shade_vertices,
    terrain_colors,
)
from alpine_terrain.engine.palette import MAX_VARIATION, NIGHT_GRASS, zone_index
from alpine_terrain.lighting import DAY_STATE, NIGHT_STATE
from alpine_terrain.procgen import FractalComposer, NoiseField


@pytest.fixture(scope="module")
def generator():
    gen = HeightFieldGenerator(width=40.0, depth=40.0, segments=8, height_scale=12.0, seed=42)
    gen.generate()
    return gen


def test_grid_geometry_layout():
    geometry = GridGeometry(width=10.0, depth=20.0, segments=4)

    assert geometry.vertex_count == 25
    assert geometry.triangle_count == 32
    assert geometry.positions.shape == (25, 3)
    assert geometry.indices.shape == (32, 3)
    assert geometry.indices.max() == 24

    # Row-major from the -Z edge, x running fastest
    assert tuple(geometry.positions[0]) == (-5.0, 0.0, -10.0)
    assert tuple(geometry.positions[4]) == (5.0, 0.0, -10.0)
    assert tuple(geometry.positions[24]) == (5.0, 0.0, 10.0)


def test_grid_geometry_uvs_repeat():
    geometry = GridGeometry(width=10.0, depth=10.0, segments=2)

    assert geometry.uvs.shape == (9, 2)
    assert geometry.uvs.min() == 0.0
    assert geometry.uvs.max() == 8.0


def test_grid_geometry_rejects_bad_sizes():
    with pytest.raises(ValueError):
        GridGeometry(width=0.0)
    with pytest.raises(ValueError):
        GridGeometry(segments=0)
    with pytest.raises(ValueError):
        GridGeometry(segments=2.5)


def test_flat_grid_normals_point_up():
    geometry = GridGeometry(width=10.0, depth=10.0, segments=3)
    geometry.displace(np.zeros(geometry.vertex_count))
    normals = geometry.compute_vertex_normals()

    np.testing.assert_allclose(normals, np.tile([0.0, 1.0, 0.0], (16, 1)), atol=1e-12)


def test_ramp_normals_follow_the_plane():
    geometry = GridGeometry(width=10.0, depth=10.0, segments=4)
    geometry.displace(geometry.positions[:, 0].copy())
    normals = geometry.compute_vertex_normals()

    expected = np.array([-1.0, 1.0, 0.0]) / np.sqrt(2.0)
    np.testing.assert_allclose(normals, np.tile(expected, (25, 1)), atol=1e-9)


def test_displace_length_mismatch():
    geometry = GridGeometry(segments=2)
    with pytest.raises(ValueError, match="Expected 9 heights"):
        geometry.displace(np.zeros(10))


def test_generate_shapes_and_ranges(generator):
    hf = generator.height_field

    assert hf.vertex_count == 81
    assert hf.heights.shape == (81,)
    assert hf.slopes.shape == (81,)
    assert hf.normals.shape == (81, 3)
    assert hf.grid().shape == (9, 9)

    assert np.all((hf.heights >= 0.0) & (hf.heights <= 1.0))
    assert np.all((hf.slopes >= 0.0) & (hf.slopes <= 1.0))
    np.testing.assert_allclose(np.linalg.norm(hf.normals, axis=1), 1.0)
    np.testing.assert_allclose(hf.positions[:, 1], hf.heights * 12.0)
    np.testing.assert_allclose(hf.slopes, 1.0 - np.abs(hf.normals[:, 1]))


def test_generated_arrays_are_read_only(generator):
    hf = generator.height_field

    with pytest.raises(ValueError):
        hf.heights[0] = 0.5
    with pytest.raises(ValueError):
        hf.slopes[0] = 0.5


def test_heights_match_height_function(generator):
    composer = generator.composer
    hf = generator.height_field

    # Corner vertices sit at normalized (0, 0) and (1, 1)
    assert hf.heights[0] == pytest.approx(composer.alpine_height(0.0, 0.0), abs=1e-12)
    assert hf.heights[-1] == pytest.approx(composer.alpine_height(1.0, 1.0), abs=1e-12)


def test_lattice_sampling_matches_every_vertex(generator):
    composer = generator.composer
    hf = generator.height_field

    for height, (x, _, z) in zip(hf.heights, hf.positions):
        nx, nz = generator.normalize(x, z)
        assert height == pytest.approx(composer.alpine_height(nx, nz), abs=1e-12)


class ScatteredGeometry:
    """Vertices that do not form a lattice."""

    def __init__(self, xz):
        xz = np.asarray(xz, dtype=np.float64)
        self.positions = np.column_stack([xz[:, 0], np.zeros(len(xz)), xz[:, 1]])
        self.normals = np.tile([0.0, 1.0, 0.0], (len(xz), 1))

    def displace(self, heights):
        self.positions[:, 1] = heights

    def compute_vertex_normals(self):
        return self.normals


def test_generate_samples_scattered_vertices():
    gen = HeightFieldGenerator(width=40.0, depth=40.0, segments=4, height_scale=10.0, seed=42)
    geometry = ScatteredGeometry([(-20.0, -20.0), (3.5, 7.25), (10.0, -4.0), (20.0, 20.0)])

    hf = gen.generate(geometry)

    assert hf.vertex_count == 4
    for height, (x, _, z) in zip(hf.heights, hf.positions):
        assert height * 10.0 == pytest.approx(gen.get_height_at(x, z), abs=1e-9)


def test_generation_is_deterministic(generator):
    again = HeightFieldGenerator(width=40.0, depth=40.0, segments=8, height_scale=12.0, seed=42)
    hf = again.generate()

    np.testing.assert_array_equal(hf.heights, generator.height_field.heights)


def test_generate_into_supplied_geometry():
    geometry = GridGeometry(width=40.0, depth=40.0, segments=4)
    gen = HeightFieldGenerator(width=40.0, depth=40.0, segments=4, height_scale=10.0)
    hf = gen.generate(geometry)

    np.testing.assert_allclose(geometry.positions[:, 1], hf.heights * 10.0)
    # The field holds copies, not views of the geometry
    geometry.positions[:, 1] = 0.0
    assert hf.positions[:, 1].max() > 0.0


def test_get_height_at_grid_points(generator):
    hf = generator.height_field

    assert generator.get_height_at(-20.0, -20.0) == pytest.approx(hf.heights[0] * 12.0)
    assert generator.get_height_at(20.0, 20.0) == pytest.approx(hf.heights[-1] * 12.0)
    assert generator.get_height_at(0.0, 0.0) == pytest.approx(hf.heights[40] * 12.0)


def test_get_height_at_outside_terrain(generator):
    assert generator.get_height_at(20.5, 0.0) == 0.0
    assert generator.get_height_at(0.0, -1000.0) == 0.0
    assert generator.get_height_at(-20.01, 20.01) == 0.0


def test_save_before_generate():
    gen = HeightFieldGenerator(segments=2)
    with pytest.raises(RuntimeError):
        gen.save_heightmap("unused.png")


def test_save_npy(generator, tmp_path):
    path = generator.save_heightmap(tmp_path / "heights.npy", format="npy")

    loaded = np.load(path)
    assert loaded.shape == (9, 9)
    np.testing.assert_array_equal(loaded, generator.height_field.grid())


def test_save_png(generator, tmp_path):
    from PIL import Image

    path = generator.save_heightmap(tmp_path / "heights.png", format="png")

    with Image.open(path) as image:
        assert image.size == (9, 9)
        data = np.array(image)
    expected = np.round(generator.height_field.grid() * 65535)
    np.testing.assert_array_equal(data.astype(np.int64), expected.astype(np.int64))


def test_save_unknown_format(generator, tmp_path):
    with pytest.raises(ValueError, match="Unsupported format"):
        generator.save_heightmap(tmp_path / "heights.exr", format="exr")


def test_parameter_overrides_change_terrain():
    flat = FractalComposer(NoiseField(42), {"valley_threshold": 1.0, "valley_flatten": 0.0})
    gen = HeightFieldGenerator(width=10.0, depth=10.0, segments=3, composer=flat)
    hf = gen.generate()

    np.testing.assert_allclose(hf.heights, 1.0)
    np.testing.assert_allclose(hf.slopes, 0.0, atol=1e-12)


def test_zone_index_boundaries():
    heights = np.array([0.0, 0.2, 0.35, 0.55, 0.72, 0.82, 1.0])
    np.testing.assert_array_equal(zone_index(heights), [0, 1, 2, 3, 4, 5, 5])


def test_terrain_colors_day_and_night(generator):
    hf = generator.height_field

    day = terrain_colors(hf.heights, hf.slopes, 0.0)
    night = terrain_colors(hf.heights, hf.slopes, 1.0)

    assert day.shape == (81, 3)
    assert np.all((day >= 0.0) & (day <= 1.0))
    assert night.mean() < day.mean()

    low = terrain_colors(np.array([0.1]), np.array([0.0]), 1.0)
    np.testing.assert_allclose(low[0], NIGHT_GRASS)


def test_boundary_variation_range(generator):
    hf = generator.height_field
    variation = boundary_variation(generator.composer.field, hf.uvs)

    assert variation.shape == (81,)
    assert np.all((variation >= 0.0) & (variation <= MAX_VARIATION))

    colors = terrain_colors(hf.heights, hf.slopes, 0.5, variation)
    assert colors.shape == (81, 3)


def test_shade_vertices(generator):
    hf = generator.height_field
    base = terrain_colors(hf.heights, hf.slopes)

    lit_day = shade_vertices(base, hf.normals, hf.slopes, DAY_STATE)
    lit_night = shade_vertices(base, hf.normals, hf.slopes, NIGHT_STATE)

    assert lit_day.shape == (81, 3)
    assert np.all((lit_day >= 0.0) & (lit_day <= 1.0))
    assert lit_night.mean() < lit_day.mean()


def test_analyzer_report(generator):
    hf = generator.height_field
    report = HeightmapAnalyzer().analyze(hf.heights, hf.slopes)

    stats = report["elevation_stats"]
    assert stats["min"] == pytest.approx(hf.heights.min())
    assert stats["max"] == pytest.approx(hf.heights.max())
    assert stats["range"] == pytest.approx(stats["max"] - stats["min"])

    coverage = report["zone_coverage"]
    assert list(coverage) == ZONE_NAMES
    assert sum(coverage.values()) == pytest.approx(1.0)

    assert report["analysis_metadata"]["vertex_count"] == 81
    assert 0.0 <= report["slope_analysis"]["steep_area_fraction"] <= 1.0


if __name__ == "__main__":
    print("🧪 Testing terrain generation...")
    raise SystemExit(pytest.main([__file__, "-v"]))
