"""Image export utilities for rendered frames.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from sdfmarch.core.frame import render_frame
    >>> from sdfmarch.preview.export import save_png
    >>>
    >>> pixels = render_frame(scene, (0.0, 0.0, 0.0), 320, 240, 10)
    >>> save_png(pixels, 320, 240, "frame.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from sdfmarch.core.color import to_image


def save_png(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
    filepath: str | Path,
) -> Path:
    """Save an 8-bit pixel buffer as a PNG file.

    Args:
        buffer: Flat RGB buffer of shape (width * height, 3), dtype uint8,
            as returned by render_frame().
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).

    Returns:
        The path written.

    Raises:
        ValueError: If the buffer is not uint8 or doesn't match the size.
    """
    if buffer.dtype != np.uint8:
        raise ValueError(f"Buffer must be uint8, got {buffer.dtype}")

    image = np.ascontiguousarray(to_image(buffer, width, height))
    path = Path(filepath)
    PILImage.fromarray(image).save(path)
    return path


def load_png(filepath: str | Path) -> tuple[npt.NDArray[np.uint8], int, int]:
    """Load a PNG back into the flat buffer layout.

    Returns:
        A tuple (buffer, width, height) with buffer of shape
        (width * height, 3), dtype uint8.
    """
    with PILImage.open(filepath) as pil_image:
        image = np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
    height, width, _ = image.shape
    return image.reshape(width * height, 3), width, height


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two buffers or images.

    Raises:
        ValueError: If shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
