#!/usr/bin/env python3
"""Render the reference scene (or a scene file) with the Whitted tracer.

Usage:
    python examples/render_reference_scene.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 2000)
    --height HEIGHT     Image height in pixels (default: 1500)
    --fov DEGREES       Vertical field of view in degrees (default: 60)
    --depth DEPTH       Reflection/refraction recursion depth (default: 3)
    --scene FILE        JSON scene file to render instead of the reference scene
    --output OUTPUT     Output file path (default: whitted.png)
    --arch ARCH         Taichi backend: auto, cpu or gpu (default: auto)
    --quiet             Suppress progress output

Example:
    python examples/render_reference_scene.py --width 800 --height 600
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: 2000, or the scene file's)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: 1500, or the scene file's)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Vertical field of view in degrees (default: 60, or the scene file's)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Reflection/refraction recursion depth (default: 3)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in reference scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="whitted.png",
        help="Output file path (default: whitted.png)",
    )
    parser.add_argument(
        "--arch",
        choices=("auto", "cpu", "gpu"),
        default="auto",
        help="Taichi backend (default: auto, GPU with CPU fallback)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def init_taichi(arch: str, quiet: bool) -> None:
    """Initialize Taichi on the requested backend."""
    if arch == "cpu":
        ti.init(arch=ti.cpu)
        backend = "CPU"
    elif arch == "gpu":
        ti.init(arch=ti.gpu)
        backend = "GPU"
    else:
        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu)
            backend = "GPU"
        except Exception:
            ti.init(arch=ti.cpu)
            backend = "CPU"
    if not quiet:
        print(f"Using {backend} backend")


def render_scene(
    width: int | None = None,
    height: int | None = None,
    fov_degrees: float | None = None,
    depth: int = 3,
    scene_path: str | None = None,
    output_path: str = "whitted.png",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels; None keeps the scene's setting.
        height: Image height in pixels; None keeps the scene's setting.
        fov_degrees: Vertical field of view in degrees; None keeps the scene's.
        depth: Reflection/refraction recursion depth.
        scene_path: JSON scene file, or None for the reference scene.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.camera.pinhole import RenderSettings
    from whitted.core.renderer import Renderer
    from whitted.scene.config import load_scene_file
    from whitted.scene.reference import create_reference_scene

    scene, settings = create_reference_scene()
    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        scene, file_settings = load_scene_file(scene_path)
        if file_settings is not None:
            settings = file_settings

    settings = RenderSettings(
        width=width if width is not None else settings.width,
        height=height if height is not None else settings.height,
        fov=math.radians(fov_degrees) if fov_degrees is not None else settings.fov,
        camera=settings.camera,
    )

    if not quiet:
        print(
            f"Rendering {len(scene.entities)} entities, {len(scene.lights)} lights "
            f"at {settings.width}x{settings.height}, depth {depth}..."
        )

    renderer = Renderer(scene, settings, depth=depth)
    renderer.render()
    output_file = renderer.save(output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {renderer.render_seconds:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    init_taichi(args.arch, args.quiet)

    try:
        render_scene(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            depth=args.depth,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
