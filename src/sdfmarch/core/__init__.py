"""Core rendering module.

This module contains the fundamental building blocks of the renderer:

Components:
    ray: Ray data structure and vector utilities
    sampler: Explicit per-task random streams and sampling helpers
    marcher: Sphere marching and finite-difference normal estimation
    integrator: Recursive diffuse light transport with a sky gradient
    frame: Jittered per-pixel sampling mapped over a frame in parallel
    color: Clamped quantization of linear radiance to bytes

All per-ray work runs inside Taichi functions; only frame-level entry points
and host-side readouts are plain Python.
"""

from .ray import (
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    max_component,
    near_zero,
    normalize,
    ray_at,
    vec3,
)
from .sampler import (
    next_float,
    next_u32,
    pixel_jitter,
    random_in_unit_sphere,
    seed_stream,
    wang_hash,
)

# Note: marcher, integrator and frame are NOT imported here to avoid circular
# imports with materials. Import them directly, e.g.:
#   from sdfmarch.core.frame import render_frame

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "max_component",
    "near_zero",
    "wang_hash",
    "seed_stream",
    "next_u32",
    "next_float",
    "random_in_unit_sphere",
    "pixel_jitter",
]
