#!/usr/bin/env python3
"""Interactive preview of the carved cube with an orbiting camera.

Opens a window that re-renders the scene every frame from a camera origin
circling in the image plane, so the subject appears to sway.

Usage:
    python -m examples.orbit_preview [options]

Controls:
    Esc: close the window
    P:   export the current frame as a timestamped PNG
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root / "src") not in sys.path:
    sys.path.insert(0, str(_project_root / "src"))


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Interactive orbiting SDF preview.")
    parser.add_argument("--width", type=int, default=320, help="Window width (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Window height (default: 240)")
    parser.add_argument(
        "--samples", type=int, default=4, help="Samples per pixel per frame (default: 4)"
    )
    parser.add_argument(
        "--radius", type=float, default=0.5, help="Camera orbit radius (default: 0.5)"
    )
    parser.add_argument(
        "--speed", type=float, default=1.0, help="Orbit speed in rad/s (default: 1.0)"
    )
    parser.add_argument(
        "--arch", choices=("cpu", "gpu"), default="gpu", help="Taichi backend (default: gpu)"
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point for the interactive preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    from sdfmarch.config import init_backend

    # Initialize Taichi first (before creating any field)
    init_backend(args.arch)
    print(f"Taichi backend: {args.arch.upper()}")

    from sdfmarch.preview.interactive import OrbitPreview
    from sdfmarch.scene import create_carved_cube_scene

    if not OrbitPreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("This script requires a graphical display environment.")
        return 1

    print(f"Creating interactive preview window ({args.width}x{args.height})...")
    preview = OrbitPreview(
        args.width,
        args.height,
        create_carved_cube_scene(),
        samples=args.samples,
        orbit_radius=args.radius,
        orbit_speed=args.speed,
    )

    print("Starting interactive rendering...")
    print("  - Press P to export the current frame")
    print("  - Press Esc or close the window to exit")
    print()

    try:
        preview.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print("Preview window closed.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
