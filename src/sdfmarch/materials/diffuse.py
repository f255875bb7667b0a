"""Fixed-albedo diffuse scattering.

Every surface reflects ALBEDO (50%) of the incoming light in every channel.
The bounce direction points from the hit point toward a random point inside
the unit sphere sitting on the surface normal, which leans the distribution
toward the normal (cosine-like, not exactly Lambertian).

Example:
    >>> # Inside a Taichi function:
    >>> # state, direction = scatter_diffuse(normal, state)
    >>> # position = offset_origin(point, normal, direction)
"""

import taichi as ti

from sdfmarch.core.marcher import MIN_DISTANCE
from sdfmarch.core.ray import dot, near_zero, normalize, vec3
from sdfmarch.core.sampler import random_in_unit_sphere

# Fraction of light reflected per bounce
ALBEDO = 0.5

# Ray offset epsilon to avoid re-hitting the surface just left
RAY_EPSILON = 2.0 * MIN_DISTANCE


@ti.func
def scatter_diffuse(normal: vec3, state: ti.u32):
    """Sample a bounce direction around a surface normal.

    The scatter target is ``point + normal + random_in_unit_sphere()``; the
    returned direction is the normalized offset ``normal + random``.

    Args:
        normal: The unit surface normal at the hit point.
        state: The task's random stream state.

    Returns:
        A tuple (state, direction) with a unit direction. If the random
        point cancels the normal, the normal itself is used.
    """
    s, offset = random_in_unit_sphere(state)
    target = normal + offset

    direction = normal
    if not near_zero(target):
        direction = normalize(target)

    return s, direction


@ti.func
def offset_origin(point: vec3, normal: vec3, direction: vec3) -> vec3:
    """Offset a bounce ray origin to avoid self-intersection.

    Pushes the point by RAY_EPSILON along the normal, on the side the new
    ray travels toward.

    Args:
        point: The hit point.
        normal: The surface normal.
        direction: The bounce direction.

    Returns:
        The offset origin.
    """
    offset_dir = normal
    if dot(direction, normal) < 0.0:
        offset_dir = -normal
    return point + RAY_EPSILON * offset_dir
