"""Pinhole camera: pixel coordinates to primary rays.

The camera sits at an origin that may change every frame and always looks
down +Z. A continuous pixel coordinate (integer pixel plus sub-pixel
jitter) is mapped to normalized device coordinates and then to a direction
on the z = 1 image plane:

    ndc_x = ((px / width) * 2 - 1) * (width / height)
    ndc_y = (py / height) * 2 - 1
    direction = normalize(ndc_x, ndc_y, 1)

Pixel row 0 is the top of the picture and has ndc_y = -1, so world +Y
points down the screen. The horizontal field of view follows from the
aspect ratio; the vertical one is fixed at 90 degrees.

Example:
    >>> # Inside a Taichi function:
    >>> # ray = primary_ray(origin, x + 0.5, y + 0.5, width, height)
"""

import taichi as ti
import taichi.math as tm

from sdfmarch.core.ray import Ray, make_ray, normalize, vec3


@ti.func
def pixel_to_ndc(px: ti.f32, py: ti.f32, width: ti.i32, height: ti.i32) -> tm.vec2:
    """Convert a continuous pixel coordinate to aspect-corrected NDC.

    Args:
        px: Horizontal pixel coordinate (0 = left edge).
        py: Vertical pixel coordinate (0 = top edge).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        (ndc_x, ndc_y) with ndc_x scaled by width / height.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    ndc_x = (px / w * 2.0 - 1.0) * (w / h)
    ndc_y = py / h * 2.0 - 1.0
    return tm.vec2(ndc_x, ndc_y)


@ti.func
def camera_direction(px: ti.f32, py: ti.f32, width: ti.i32, height: ti.i32) -> vec3:
    """Unit camera-space direction through a continuous pixel coordinate."""
    ndc = pixel_to_ndc(px, py, width, height)
    return normalize(vec3(ndc.x, ndc.y, 1.0))


@ti.func
def primary_ray(origin: vec3, px: ti.f32, py: ti.f32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the camera ray through a continuous pixel coordinate.

    Args:
        origin: Camera position for this frame.
        px: Horizontal pixel coordinate, jitter included.
        py: Vertical pixel coordinate, jitter included.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray with a unit direction.
    """
    return make_ray(origin, camera_direction(px, py, width, height))
