"""Matplotlib-based preview display for rendered frames.

Example:
    >>> from sdfmarch.preview.display import show_frame
    >>> show_frame(pixels, 320, 240, title="carved cube")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from sdfmarch.core.color import to_image


def show_frame(
    buffer: npt.NDArray[np.uint8],
    width: int,
    height: int,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display an 8-bit pixel buffer in a Matplotlib figure.

    Args:
        buffer: Flat RGB buffer of shape (width * height, 3), dtype uint8.
        width: Image width in pixels.
        height: Image height in pixels.
        title: Optional figure title (default shows the resolution).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    image = to_image(buffer, width, height)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    # Row 0 of the buffer is the top of the picture, which is imshow's default
    ax.imshow(image, interpolation="nearest")
    ax.axis("off")
    ax.set_title(title if title is not None else f"{width}x{height}")

    fig.tight_layout()
    plt.show(block=block)
