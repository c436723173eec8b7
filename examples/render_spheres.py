#!/usr/bin/env python3
"""Render the default four-sphere scene (or a scene file) to an image.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH         Image width in pixels (default: 400)
    --height HEIGHT       Image height in pixels (default: 200)
    --samples SAMPLES     Samples per pixel (default: 100)
    --max-depth DEPTH     Scatter events per path (default: 50)
    --rows-per-batch N    Rows between progress updates (default: 16)
    --scene FILE          JSON scene file (default: built-in scene)
    --output OUTPUT       Output file path (default: spheres.png)
    --seed SEED           Seed for the random generator (default: unseeded)
    --arch {cpu,gpu}      Taichi backend (default: cpu)
    --quiet               Suppress progress output

Example:
    python examples/render_spheres.py --width 200 --height 100 --samples 50
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from raycaster.config import DEFAULT_SAMPLES, MAX_DEPTH, RenderSettings, init_backend


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render spheres with the Monte Carlo ray caster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels (default: 400)")
    parser.add_argument("--height", type=int, default=200, help="Image height in pixels (default: 200)")
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Scatter events per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=16,
        help="Rows between progress updates (default: 16)",
    )
    parser.add_argument("--scene", type=str, default=None, help="JSON scene file")
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: unseeded)")
    parser.add_argument("--arch", choices=["cpu", "gpu"], default="cpu", help="Taichi backend")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def render_spheres(settings: RenderSettings, output_path: str, scene_file: str | None = None, quiet: bool = False) -> Path:
    """Render a scene and save it to a file.

    Taichi must already be initialized.

    Args:
        settings: Render settings.
        output_path: Output image path.
        scene_file: Optional JSON scene file; the default scene otherwise.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports: these modules declare Taichi fields
    from raycaster.camera.fixed import Camera, setup_camera
    from raycaster.core.renderer import Renderer
    from raycaster.preview.export import save_png
    from raycaster.scene.default_scene import create_default_scene
    from raycaster.scene.manager import SceneManager

    if scene_file is None:
        scene, camera = create_default_scene()
    else:
        scene = SceneManager()
        scene.load_scene_file(scene_file)
        camera = Camera()

    if not quiet:
        print(f"Scene: {scene.get_sphere_count()} spheres, {settings.width}x{settings.height}")

    setup_camera(camera)
    renderer = Renderer(settings)

    if not quiet:
        print(f"Rendering {settings.samples_per_pixel} samples per pixel...")

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (done / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(renderer, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING if args.quiet else logging.INFO)

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        samples_per_pixel=args.samples,
        max_depth=args.max_depth,
        rows_per_batch=args.rows_per_batch,
        arch=args.arch,
        seed=args.seed,
    )

    try:
        backend = init_backend(settings)
        if not args.quiet:
            print(f"Using {backend.upper()} backend")
        render_spheres(settings, args.output, scene_file=args.scene, quiet=args.quiet)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
