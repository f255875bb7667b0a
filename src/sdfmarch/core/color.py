"""Conversion of linear radiance buffers to displayable 8-bit color.

Radiance produced by the integrator is not bounded by 1: the sky is already
white at full strength and averages of bright samples can overshoot through
rounding. Channels are therefore clamped before quantization, so values at
or above 1.0 map to 255 rather than wrapping around.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Scale used to map [0, 1) onto the 256 byte levels
QUANTIZE_SCALE = 255.99


def to_rgb8(colors: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Quantize linear colors to bytes.

    Each channel becomes ``int(clamp(255.99 * c, 0, 255))``. NaN and Inf
    channels are treated as 0.

    Args:
        colors: Array of linear colors, any shape ending in 3.

    Returns:
        Array of the same shape with dtype uint8.
    """
    array = np.asarray(colors, dtype=np.float32)
    array = np.nan_to_num(array, nan=0.0, posinf=0.0, neginf=0.0)
    scaled = np.clip(QUANTIZE_SCALE * array, 0.0, 255.0)
    return scaled.astype(np.uint8)


def to_image(
    buffer: npt.NDArray[np.generic],
    width: int,
    height: int,
) -> npt.NDArray[np.generic]:
    """Reshape a flat row-major pixel buffer into an image array.

    Args:
        buffer: Flat buffer of shape (width * height, 3), index y * width + x.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array of shape (height, width, 3), row 0 at the top of the picture.

    Raises:
        ValueError: If the buffer size doesn't match the dimensions.
    """
    expected_shape = (width * height, 3)
    if buffer.shape != expected_shape:
        raise ValueError(
            f"Buffer shape {buffer.shape} doesn't match expected {expected_shape}"
        )
    return buffer.reshape(height, width, 3)
