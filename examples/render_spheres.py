#!/usr/bin/env python3
"""Render a sphere scene with the Whitted ray tracer.

Renders the built-in three-sphere scene, or a scene loaded from a JSON file,
and writes the image as PPM or PNG depending on the output suffix.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 1024)
    --height HEIGHT     Image height in pixels (default: 768)
    --depth DEPTH       Maximum bounce depth (default: 10)
    --output OUTPUT     Output file path, .ppm or .png (default: out.ppm)
    --scene SCENE       JSON scene file (default: built-in scene)
    --cpu               Force the CPU backend
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 512 --height 384 --output spheres.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene with recursive ray tracing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=10,
        help="Maximum bounce depth (default: 10)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path, .ppm or .png (default: out.ppm)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in three-sphere scene)",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_spheres(
    width: int = 1024,
    height: int = 768,
    depth: int = 10,
    output_path: str = "out.ppm",
    scene_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        depth: Maximum bounce depth.
        output_path: Output file path (.ppm or .png).
        scene_path: Optional JSON scene file; the built-in scene otherwise.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.tinytracer.camera.pinhole import PinholeCamera, setup_camera
    from src.tinytracer.core.integrator import get_image_numpy, render_image, setup_render_target
    from src.tinytracer.output.export import save_image
    from src.tinytracer.scene.manager import SceneManager
    from src.tinytracer.scene.model import default_scene, load_scene_file

    scene = load_scene_file(scene_path) if scene_path else default_scene()
    if not quiet:
        source = scene_path or "built-in scene"
        print(f"Loaded {len(scene.spheres)} spheres, {len(scene.lights)} lights from {source}")

    manager = SceneManager()
    manager.load(scene)
    setup_camera(PinholeCamera())
    setup_render_target(width, height)

    if not quiet:
        print(f"Rendering {width}x{height} at depth {depth}...")

    start_time = time.time()
    render_image(depth=depth)
    image = get_image_numpy()

    output_file = Path(output_path)
    save_image(image, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            depth=args.depth,
            output_path=args.output,
            scene_path=args.scene,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
