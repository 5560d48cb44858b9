"""
Command line interface for alpine terrain generation.

Commands:
- generate: sample a height field and save it as PNG/TIFF/NPY
- stats: print height field statistics as JSON
- view: open the Raylib viewer
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .engine import HeightFieldGenerator, HeightmapAnalyzer
from .lighting import DEFAULT_TRANSITION_DURATION
from .procgen import ALPINE_PARAMETERS, DEFAULT_SEED, FractalComposer, NoiseField


def parse_overrides(items: Optional[List[str]]) -> Dict[str, float]:
    """Parse NAME=VALUE pairs for the alpine noise parameters."""

    overrides = {}
    for item in items or []:
        name, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Expected NAME=VALUE, got '{item}'")
        overrides[name.strip()] = float(value)

    ALPINE_PARAMETERS.check_names(overrides)
    return overrides


def build_generator(args) -> HeightFieldGenerator:
    composer = FractalComposer(NoiseField(args.seed), parse_overrides(args.param))
    return HeightFieldGenerator(
        width=args.width,
        depth=args.depth,
        segments=args.segments,
        height_scale=args.height_scale,
        composer=composer,
        show_progress=not args.quiet
    )


def cmd_generate(args) -> int:
    generator = build_generator(args)
    generator.generate()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    generator.save_heightmap(output, format=args.format)

    print(f"✓ Heightmap saved to {output}")
    return 0


def cmd_stats(args) -> int:
    generator = build_generator(args)
    height_field = generator.generate()

    report = HeightmapAnalyzer().analyze(height_field.heights, height_field.slopes)
    report["parameters"] = generator.composer.parameters
    print(json.dumps(report, indent=2))
    return 0


def cmd_view(args) -> int:
    from .render import terrain_viewer

    return terrain_viewer.run_viewer(
        build_generator(args),
        window_width=args.window_width,
        window_height=args.window_height,
        transition_duration=args.duration
    )


def _add_terrain_args(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=float, default=400.0, help="Terrain width")
    parser.add_argument("--depth", type=float, default=400.0, help="Terrain depth")
    parser.add_argument("--segments", type=int, default=256, help="Grid segments per side")
    parser.add_argument("--height-scale", type=float, default=120.0, help="Height scaling factor")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Noise seed")
    parser.add_argument(
        "--param", action="append", metavar="NAME=VALUE",
        help=f"Override a noise parameter ({', '.join(ALPINE_PARAMETERS.get_param_names())})"
    )
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar")


def main(argv=None) -> int:
    """CLI entry point."""

    parser = argparse.ArgumentParser(description="Procedural alpine terrain")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate and save a heightmap")
    _add_terrain_args(generate)
    generate.add_argument("--output", "-o", required=True, help="Output file")
    generate.add_argument("--format", default="png", choices=["png", "tiff", "npy"], help="File format")
    generate.set_defaults(func=cmd_generate)

    stats = subparsers.add_parser("stats", help="Print height field statistics")
    _add_terrain_args(stats)
    stats.set_defaults(func=cmd_stats)

    view = subparsers.add_parser("view", help="Open the interactive viewer")
    _add_terrain_args(view)
    view.add_argument("--window-width", type=int, default=1280, help="Window width")
    view.add_argument("--window-height", type=int, default=720, help="Window height")
    view.add_argument(
        "--duration", type=float, default=DEFAULT_TRANSITION_DURATION,
        help="Day/night transition seconds"
    )
    view.set_defaults(func=cmd_view, segments=128)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        return args.func(args)
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
