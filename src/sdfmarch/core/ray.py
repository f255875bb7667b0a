"""Ray data structure and vector utilities for sphere marching.

This module provides the fundamental Ray dataclass and the small vector
toolkit the distance fields, the marcher and the integrator are written
against. All operations are designed to work within Taichi kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> position = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(position=position, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with a starting position and direction vector.

    Attributes:
        position: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). The marcher uses
            it as a step direction without normalizing it, so callers must
            pass a unit vector; a non-unit direction rescales every step.
    """

    position: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t."""
    return ray.position + t * ray.direction


@ti.func
def make_ray(position: vec3, direction: vec3) -> Ray:
    """Create a ray from position and direction inside Taichi scope."""
    return Ray(position=position, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Zero-length input is undefined here; callers that can produce one
    (normal estimation, scattering) check near_zero() first.
    """
    return tm.normalize(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def max_component(v: vec3) -> ti.f32:
    """Return the largest of the three components of a vector.

    Args:
        v: The input vector.

    Returns:
        max(v.x, v.y, v.z)
    """
    return ti.max(v.x, v.y, v.z)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Useful for detecting degenerate gradients and scatter targets.

    Args:
        v: The vector to check.

    Returns:
        1 if all components are near zero, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s
