"""Diffuse path tracing integrator for Monte Carlo light transport.

This module estimates the light arriving along a ray by following it through
repeated diffuse bounces until it escapes to the sky. The estimate is the
recursion

    radiance(ray, depth) =
        black                                  if depth > MAX_BOUNCES
        sky_color(ray.direction)               if the march misses
        ALBEDO * radiance(bounce_ray, depth+1) if the march hits

evaluated as a bounded loop with a throughput accumulator instead of real
recursion (Taichi functions cannot recurse). The depth ceiling is what ends
paths trapped between surfaces.

Key features:
    - Sphere-marched intersections against any scene of distance fields
    - Fixed 50% albedo diffuse bounces
    - Vertical white-to-blue sky gradient on escape
    - Randomness drawn from an explicit per-task stream

Example:
    >>> from sdfmarch.core.integrator import trace_ray
    >>> from sdfmarch.scene.presets import create_single_sphere_scene
    >>> scene = create_single_sphere_scene()
    >>> color = trace_ray(scene, (0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
"""

from typing import Any

import taichi as ti

from sdfmarch.core.marcher import march
from sdfmarch.core.ray import vec3
from sdfmarch.core.sampler import seed_stream
from sdfmarch.materials.diffuse import ALBEDO, offset_origin, scatter_diffuse

# =============================================================================
# Integrator Constants
# =============================================================================

# Deepest bounce that still scatters; deeper paths return black
MAX_BOUNCES = 5

# Sky gradient endpoints
WHITE = vec3(1.0, 1.0, 1.0)
SKY_BLUE = vec3(0.5, 0.7, 1.0)


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Background radiance for a ray that escaped the scene.

    A vertical gradient from white to sky blue. World +Y points down the
    screen, so looking straight down (+Y) gives white and looking straight
    up (-Y) gives sky blue::

        t = 0.5 * (1 - direction.y)
        color = (1 - t) * WHITE + t * SKY_BLUE

    Args:
        direction: The unit ray direction.

    Returns:
        The sky radiance (RGB).
    """
    t = 0.5 * (1.0 - direction.y)
    return (1.0 - t) * WHITE + t * SKY_BLUE


@ti.func
def trace_radiance(
    scene: ti.template(),
    position: vec3,
    direction: vec3,
    depth: ti.i32,
    state: ti.u32,
):
    """Estimate the radiance arriving along a ray.

    Args:
        scene: The scene (compile-time template).
        position: Ray start point.
        direction: Unit ray direction.
        depth: Bounce depth of this ray; 0 for camera rays.
        state: The task's random stream state.

    Returns:
        A tuple (state, radiance). Radiance is black whenever depth exceeds
        MAX_BOUNCES, before or during the walk.
    """
    s = state
    radiance = vec3(0.0, 0.0, 0.0)
    throughput = 1.0
    origin = position
    heading = direction
    active = 1

    for _ in range(depth, MAX_BOUNCES + 1):
        if active == 1:
            result = march(scene, origin, heading)
            if result.hit == 0:
                radiance = throughput * sky_color(heading)
                active = 0
            else:
                s, bounce = scatter_diffuse(result.normal, s)
                throughput *= ALBEDO
                origin = offset_origin(result.point, result.normal, bounce)
                heading = bounce

    return s, radiance


# =============================================================================
# Host-side Access (for tests and debugging)
# =============================================================================


@ti.data_oriented
class _TraceReadout:
    """Single-ray trace kernel and its result field, created on first use."""

    def __init__(self) -> None:
        self.color = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def run(
        self,
        scene: ti.template(),
        position: vec3,
        direction: vec3,
        depth: ti.i32,
        seed: ti.u32,
    ):
        state = seed_stream(0, seed)
        _, radiance = trace_radiance(scene, position, direction, depth, state)
        self.color[None] = radiance


_readout: _TraceReadout | None = None


def trace_ray(
    scene: Any,
    position: Any,
    direction: Any,
    *,
    depth: int = 0,
    seed: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray from Python.

    This is a Python-callable function for testing. For production rendering,
    use the frame evaluator which processes all pixels in parallel.

    Args:
        scene: The scene to trace through.
        position: Ray start point (x, y, z).
        direction: Unit ray direction (x, y, z).
        depth: Starting bounce depth.
        seed: Seed of the random stream used by this ray.

    Returns:
        Tuple of (R, G, B) radiance.
    """
    global _readout
    if _readout is None:
        _readout = _TraceReadout()

    _readout.run(scene, vec3(*position), vec3(*direction), depth, seed)
    color = _readout.color[None]
    return (float(color[0]), float(color[1]), float(color[2]))
