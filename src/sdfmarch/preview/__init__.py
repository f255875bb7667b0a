"""Preview module for output and visualization.

Components:
    display: Matplotlib-based static display of a rendered frame
    export: PNG export and loading via Pillow
    interactive: Taichi GGUI window that re-renders an orbiting camera

Frames arrive here already quantized to 8-bit RGB by render_frame(); no
tone mapping or gamma is applied on the way to the screen or to disk.

Example:
    >>> from sdfmarch.preview import save_png, show_frame
    >>> save_png(pixels, 320, 240, "frame.png")
    >>> show_frame(pixels, 320, 240)

For the interactive window:
    >>> from sdfmarch.preview import OrbitPreview
    >>> OrbitPreview(320, 240, scene).run()
"""

from sdfmarch.preview.display import show_frame
from sdfmarch.preview.export import compute_rmse, load_png, save_png
from sdfmarch.preview.interactive import OrbitPreview, buffer_to_canvas

__all__ = [
    # Interactive preview
    "OrbitPreview",
    "buffer_to_canvas",
    # Display
    "show_frame",
    # Export
    "save_png",
    "load_png",
    "compute_rmse",
]
