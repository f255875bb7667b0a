#!/usr/bin/env python3
"""Render a still image of a distance field scene.

Renders one frame with jittered multi-sampling and writes it as a PNG.

Usage:
    python -m examples.render_sdf [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 240)
    --samples SAMPLES   Jittered samples per pixel (default: 10)
    --seed SEED         Frame seed (default: 0)
    --scene NAME        carved-cube or sphere (default: carved-cube)
    --normals SOURCE    nearest or first (default: nearest)
    --output OUTPUT     Output file path (default: sdf.png)
    --arch ARCH         cpu or gpu (default: cpu)
    --threads N         CPU worker threads (default: all cores)
    --show              Also display the result with Matplotlib
    --quiet             Suppress progress output

Example:
    python -m examples.render_sdf --width 640 --height 480 --samples 32
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sdfmarch.config import RenderSettings

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root / "src") not in sys.path:
    sys.path.insert(0, str(_project_root / "src"))

SCENES = ("carved-cube", "sphere")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a distance field scene to a PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Image width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=240,
        help="Image height in pixels (default: 240)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=10,
        help="Jittered samples per pixel (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Frame seed (default: 0)",
    )
    parser.add_argument(
        "--scene",
        choices=SCENES,
        default="carved-cube",
        help="Scene to render (default: carved-cube)",
    )
    parser.add_argument(
        "--normals",
        choices=("nearest", "first"),
        default="nearest",
        help="Distance used for surface normals (default: nearest)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sdf.png",
        help="Output file path (default: sdf.png)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="CPU worker threads (default: all cores)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the result with Matplotlib",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_sdf(
    settings: RenderSettings,
    scene_name: str = "carved-cube",
    normal_source: str = "nearest",
    output_path: str = "sdf.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a preset scene and save it to file.

    Args:
        settings: RenderSettings for the frame.
        scene_name: One of SCENES.
        normal_source: "nearest" or "first" (carved cube only).
        output_path: Output file path (PNG).
        show: If True, display the frame after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from sdfmarch.core.frame import render_frame
    from sdfmarch.preview.export import save_png
    from sdfmarch.scene import create_carved_cube_scene, create_single_sphere_scene

    settings.validate()

    if scene_name == "sphere":
        scene = create_single_sphere_scene()
    else:
        scene = create_carved_cube_scene(normal_source=normal_source)

    if not quiet:
        print(f"Scene: {scene}")
        print(
            f"Rendering {settings.width}x{settings.height} "
            f"at {settings.samples} samples per pixel..."
        )

    start_time = time.time()
    pixels = render_frame(
        scene,
        settings.camera_origin,
        settings.width,
        settings.height,
        settings.samples,
        settings.seed,
    )
    render_time = time.time() - start_time

    output_file = save_png(pixels, settings.width, settings.height, output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_time:.2f}s (includes kernel compilation)")

    if show:
        from sdfmarch.preview.display import show_frame

        show_frame(pixels, settings.width, settings.height, title=scene_name)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from sdfmarch.config import RenderSettings, init_backend

    try:
        init_backend(args.arch, threads=args.threads)
        if not args.quiet:
            print(f"Using {args.arch.upper()} backend")

        settings = RenderSettings(
            width=args.width,
            height=args.height,
            samples=args.samples,
            seed=args.seed,
        )
        render_sdf(
            settings,
            scene_name=args.scene,
            normal_source=args.normals,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
