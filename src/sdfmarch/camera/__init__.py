"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-orientation pinhole camera looking down +Z

Ray generation uses normalized device coordinates in [-1, 1], with the
horizontal axis scaled by the aspect ratio. The camera origin is a per-frame
input, so animation only needs a new origin, not a new camera object.
"""

from .pinhole import camera_direction, pixel_to_ndc, primary_ray

__all__ = [
    "pixel_to_ndc",
    "camera_direction",
    "primary_ray",
]
