#!/usr/bin/env python3
"""
Real-time alpine terrain viewer using Raylib.

Displays the generated height field as a vertex-coloured 3D mesh with an
orbiting camera. SPACE toggles between day and night.
Uses pure Python with pyray bindings.
"""

import argparse
import time
from typing import Optional

import numpy as np

try:
    import pyray as rl
    from raylib import ffi
    RAYLIB_AVAILABLE = True
except ImportError:
    RAYLIB_AVAILABLE = False

from ..controls import InputHandler, KeyCodes
from ..engine import HeightField, HeightFieldGenerator, terrain_colors, shade_vertices, boundary_variation
from ..lighting import DayNightCycle, SceneUniforms, DEFAULT_TRANSITION_DURATION
from ..procgen import DEFAULT_SEED

# Raylib mesh buffer holding vertex colours
COLOR_BUFFER = 3


def _to_rl_color(color, exposure: float = 1.0):
    r, g, b = (int(max(0.0, min(1.0, c * exposure)) * 255) for c in color)
    return rl.Color(r, g, b, 255)


class TerrainViewer:
    """
    Real-time 3D terrain viewer.

    Features:
    - Orbiting camera around the terrain
    - SPACE toggles day/night with a smooth transition
    - Altitude/slope based colouring lit by the current lighting state
    """

    def __init__(
        self,
        window_width: int = 1280,
        window_height: int = 720,
        generator: Optional[HeightFieldGenerator] = None,
        transition_duration: float = DEFAULT_TRANSITION_DURATION
    ):
        if not RAYLIB_AVAILABLE:
            raise ImportError("pyray is required. Install with: pip install 'alpine-terrain[viewer]'")

        self.window_width = window_width
        self.window_height = window_height
        self.generator = generator or HeightFieldGenerator(segments=128)

        # Lighting
        self.uniforms = SceneUniforms()
        self.time_label = "Day"
        self.cycle = DayNightCycle(
            sink=self.uniforms,
            duration=transition_duration,
            time_listeners=[self.uniforms.set_time],
            target_listeners=[self._on_target_changed]
        )
        self._applied = 0

        # Input
        self.input = InputHandler()
        self.input.on_key_down(KeyCodes.SPACE, self.cycle.toggle)

        # Terrain state
        self.height_field: Optional[HeightField] = None
        self.base_colors: Optional[np.ndarray] = None
        self.variation: Optional[np.ndarray] = None
        self.model = None
        self.vertex_order: Optional[np.ndarray] = None

        self.generation_time = 0.0
        self.start_time = 0.0

    def _on_target_changed(self, label: str):
        self.time_label = label
        print(f"Switching to {label}")

    def initialize(self):
        """Open the window, generate terrain and upload the mesh."""

        rl.init_window(self.window_width, self.window_height, "Alpine Terrain")
        rl.set_target_fps(60)

        self.camera = rl.Camera3D(
            rl.Vector3(150.0, 120.0, 200.0),
            rl.Vector3(0.0, 30.0, 0.0),
            rl.Vector3(0.0, 1.0, 0.0),
            60.0,
            rl.CAMERA_PERSPECTIVE
        )

        start = time.time()
        self.height_field = self.generator.generate()
        self.variation = boundary_variation(self.generator.composer.field, self.height_field.uvs)
        self.generation_time = time.time() - start

        self.model = self._build_model(self.height_field)
        self._refresh_colors()

        print("Alpine terrain viewer initialized!")
        print(f"  Vertices: {self.height_field.vertex_count}")
        print(f"  Generation time: {self.generation_time:.2f}s")
        print("Controls:")
        print("  SPACE - Toggle day/night")
        print("  ESC - Exit")

    def _build_model(self, height_field: HeightField):
        """Upload the height field as an unindexed Raylib mesh."""

        # Raylib indices are 16-bit, so triangles are expanded instead
        self.vertex_order = height_field.indices.astype(np.int64).ravel()
        vertices = height_field.positions[self.vertex_order].astype(np.float32)
        normals = height_field.normals[self.vertex_order].astype(np.float32)
        colors = np.full((self.vertex_order.size, 4), 255, dtype=np.uint8)

        mesh = ffi.new("Mesh *")
        mesh.vertexCount = int(self.vertex_order.size)
        mesh.triangleCount = int(self.vertex_order.size // 3)
        mesh.vertices = self._alloc("float *", vertices)
        mesh.normals = self._alloc("float *", normals)
        mesh.colors = self._alloc("unsigned char *", colors)

        rl.upload_mesh(mesh, True)
        return rl.load_model_from_mesh(mesh[0])

    @staticmethod
    def _alloc(ctype: str, array: np.ndarray):
        data = np.ascontiguousarray(array)
        ptr = ffi.cast(ctype, rl.mem_alloc(data.nbytes))
        ffi.memmove(ptr, data.tobytes(), data.nbytes)
        return ptr

    def _refresh_colors(self):
        """Re-shade the mesh with the most recent lighting state."""

        state = self.uniforms.state
        hf = self.height_field
        base = terrain_colors(hf.heights, hf.slopes, state.terrain_day_night_mix, self.variation)
        lit = shade_vertices(base, hf.normals, hf.slopes, state) * state.exposure

        rgba = np.full((hf.vertex_count, 4), 255, dtype=np.uint8)
        rgba[:, :3] = np.round(np.clip(lit, 0.0, 1.0) * 255).astype(np.uint8)
        data = np.ascontiguousarray(rgba[self.vertex_order])

        rl.update_mesh_buffer(self.model.meshes[0], COLOR_BUFFER, ffi.from_buffer(data), data.nbytes, 0)
        self._applied = self.uniforms.apply_count

    def handle_input(self):
        """Feed polled key state into the edge detector."""

        if not rl.is_window_focused():
            self.input.reset()
            return
        self.input.set_key_state(KeyCodes.SPACE, rl.is_key_down(rl.KEY_SPACE))

    def render(self):
        """Render the scene."""

        sky = self.uniforms.sky
        exposure = self.uniforms.exposure

        rl.begin_drawing()
        rl.clear_background(_to_rl_color(sky["uHorizonColor"], exposure))

        rl.begin_mode_3d(self.camera)
        rl.draw_model(self.model, rl.Vector3(0.0, 0.0, 0.0), 1.0, rl.WHITE)
        rl.end_mode_3d()

        # UI overlay
        rl.draw_text(f"{self.time_label}", 10, 10, 24, rl.RAYWHITE)
        rl.draw_text(f"Blend: {self.cycle.get_current_value():.2f}", 10, 40, 16, rl.RAYWHITE)
        rl.draw_text(f"FPS: {rl.get_fps()}", 10, 60, 16, rl.RAYWHITE)
        rl.draw_text("SPACE: Toggle day/night, ESC: Exit", 10, self.window_height - 25, 14, rl.LIGHTGRAY)

        rl.end_drawing()

    def run_main_loop(self):
        """Run the main rendering loop."""

        print("Starting terrain viewer main loop...")
        self.start_time = time.time()

        while not rl.window_should_close():
            dt = rl.get_frame_time()

            self.handle_input()
            self.cycle.update(dt, time.time() - self.start_time)
            if self.uniforms.apply_count != self._applied:
                self._refresh_colors()

            rl.update_camera(self.camera, rl.CAMERA_ORBITAL)
            self.render()

        # Cleanup
        if self.model is not None:
            rl.unload_model(self.model)
        self.input.dispose()

        rl.close_window()
        print("Terrain viewer closed")


def run_viewer(
    generator: HeightFieldGenerator,
    window_width: int = 1280,
    window_height: int = 720,
    transition_duration: float = DEFAULT_TRANSITION_DURATION
) -> int:
    """Open the viewer on an already configured generator. Returns an exit code."""

    if not RAYLIB_AVAILABLE:
        print("Error: pyray not available")
        print("Install with: pip install 'alpine-terrain[viewer]'")
        return 1

    try:
        viewer = TerrainViewer(
            window_width=window_width,
            window_height=window_height,
            generator=generator,
            transition_duration=transition_duration
        )

        viewer.initialize()
        viewer.run_main_loop()

        return 0

    except Exception as e:
        print(f"Error running terrain viewer: {e}")
        return 1


def main(argv=None):
    """CLI entry point for terrain viewer."""

    parser = argparse.ArgumentParser(description="Alpine terrain real-time viewer")
    parser.add_argument("--width", type=int, default=1280, help="Window width")
    parser.add_argument("--height", type=int, default=720, help="Window height")
    parser.add_argument("--segments", type=int, default=128, help="Grid segments (lower for faster startup)")
    parser.add_argument("--height-scale", type=float, default=120.0, help="Height scaling factor")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Noise seed")
    parser.add_argument("--duration", type=float, default=DEFAULT_TRANSITION_DURATION, help="Day/night transition seconds")

    args = parser.parse_args(argv)

    generator = HeightFieldGenerator(
        segments=args.segments,
        height_scale=args.height_scale,
        seed=args.seed,
        show_progress=True
    )
    return run_viewer(generator, args.width, args.height, args.duration)


if __name__ == "__main__":
    raise SystemExit(main())
