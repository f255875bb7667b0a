"""Sphere marching and normal estimation over a scene's distance field.

The marcher advances a ray by the scene distance at its current point,
which is a safe step: no surface lies closer than that in any direction.
Each ray ends in one of three ways:

    HIT:       the scene distance dropped below MIN_DISTANCE.
    FAR:       the scene distance, or the distance traveled, exceeded
               MAX_DISTANCE (the travel budget).
    MAX_STEPS: the iteration ceiling was reached. This turns a stalled march
               (zero direction, a field that is not Lipschitz-1) into a miss
               instead of an endless loop.

While a ray is still within MIN_TRAVEL of its starting point, hits are
ignored and steps are at least MIN_DISTANCE long. A ray that starts on a
surface and points away from it therefore leaves instead of reporting the
surface it started on.

Example:
    >>> from sdfmarch.core.marcher import march_ray
    >>> from sdfmarch.scene.presets import create_single_sphere_scene
    >>> scene = create_single_sphere_scene()
    >>> record = march_ray(scene, (0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
    >>> record.hit, record.termination
    (True, 'hit')
"""

from dataclasses import dataclass
from typing import Any

import taichi as ti

from sdfmarch.core.ray import length, length_squared, make_ray, ray_at, vec3

# =============================================================================
# Marching Constants
# =============================================================================

# Hit threshold, also the finite-difference step for normals
MIN_DISTANCE = 0.001

# Travel budget: beyond this the ray is considered to have escaped
MAX_DISTANCE = 100.0

# Iteration ceiling per march
MAX_STEPS = 200

# Distance a ray must cover before it may report a hit
MIN_TRAVEL = 2.0 * MIN_DISTANCE

# Fallback when the distance gradient vanishes: screen-up (world -Y)
FALLBACK_NORMAL = vec3(0.0, -1.0, 0.0)

# Termination codes
MARCH_HIT = 0
MARCH_FAR = 1
MARCH_MAX_STEPS = 2

TERMINATION_NAMES = {
    MARCH_HIT: "hit",
    MARCH_FAR: "far",
    MARCH_MAX_STEPS: "max_steps",
}


@ti.dataclass
class MarchResult:
    """Outcome of marching one ray.

    Attributes:
        hit: 1 if the ray reached a surface, 0 otherwise.
        distance_traveled: Distance between the start and final points.
        point: Final point of the march; on a hit, within MIN_DISTANCE of
            the surface.
        normal: Estimated unit surface normal at point. Only valid if hit == 1.
        steps: Number of steps taken.
        termination: One of MARCH_HIT, MARCH_FAR, MARCH_MAX_STEPS.
    """

    hit: ti.i32
    distance_traveled: ti.f32
    point: vec3
    normal: vec3
    steps: ti.i32
    termination: ti.i32


@ti.func
def estimate_normal(scene: ti.template(), p: vec3) -> vec3:
    """Estimate the unit outward normal at a point near a surface.

    Uses central differences of ``scene.normal_distance`` along each axis
    with epsilon MIN_DISTANCE (six field evaluations). If the gradient is
    degenerate, e.g. exactly on a crease of a combinator, FALLBACK_NORMAL is
    returned.

    Args:
        scene: The scene (compile-time template).
        p: A point on or within MIN_DISTANCE of a surface.

    Returns:
        A unit vector.
    """
    ex = vec3(MIN_DISTANCE, 0.0, 0.0)
    ey = vec3(0.0, MIN_DISTANCE, 0.0)
    ez = vec3(0.0, 0.0, MIN_DISTANCE)
    gradient = vec3(
        scene.normal_distance(p + ex) - scene.normal_distance(p - ex),
        scene.normal_distance(p + ey) - scene.normal_distance(p - ey),
        scene.normal_distance(p + ez) - scene.normal_distance(p - ez),
    )
    normal = FALLBACK_NORMAL
    if length_squared(gradient) > 1e-20:
        normal = gradient / length(gradient)
    return normal


@ti.func
def march(scene: ti.template(), position: vec3, direction: vec3) -> MarchResult:
    """March a ray through the scene.

    Args:
        scene: The scene (compile-time template).
        position: Ray start point.
        direction: Unit ray direction. Not normalized here; distance_traveled
            is measured along the actual displacement, so a zero direction
            never leaves its start point and ends at the iteration ceiling.

    Returns:
        A MarchResult. On a hit the normal has been estimated at the final
        point; on a miss it is zero.
    """
    ray = make_ray(position, direction)
    speed = length(direction)
    point = position
    t = 0.0
    traveled = 0.0
    steps = 0
    termination = MARCH_MAX_STEPS
    active = 1

    for _ in range(MAX_STEPS):
        if active == 1:
            d = scene.distance(point)
            if d > MAX_DISTANCE or traveled > MAX_DISTANCE:
                termination = MARCH_FAR
                active = 0
            elif d < MIN_DISTANCE and traveled >= MIN_TRAVEL:
                termination = MARCH_HIT
                active = 0
            else:
                step = d
                if traveled < MIN_TRAVEL:
                    step = ti.max(d, MIN_DISTANCE)
                t += step
                point = ray_at(ray, t)
                # Actual displacement; stays zero for a zero direction
                traveled = t * speed
                steps += 1

    hit = 0
    normal = vec3(0.0, 0.0, 0.0)
    if termination == MARCH_HIT:
        hit = 1
        normal = estimate_normal(scene, point)

    return MarchResult(
        hit=hit,
        distance_traveled=traveled,
        point=point,
        normal=normal,
        steps=steps,
        termination=termination,
    )


# =============================================================================
# Host-side Access (for tests, debugging and tooling)
# =============================================================================


@dataclass(frozen=True)
class MarchRecord:
    """Python-side copy of a MarchResult."""

    hit: bool
    distance_traveled: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    steps: int
    termination: str


@ti.data_oriented
class _MarchReadout:
    """Single-ray march kernel and its result fields, created on first use."""

    def __init__(self) -> None:
        self.hit = ti.field(dtype=ti.i32, shape=())
        self.traveled = ti.field(dtype=ti.f32, shape=())
        self.point = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.normal = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.steps = ti.field(dtype=ti.i32, shape=())
        self.termination = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def run(self, scene: ti.template(), position: vec3, direction: vec3):
        result = march(scene, position, direction)
        self.hit[None] = result.hit
        self.traveled[None] = result.distance_traveled
        self.point[None] = result.point
        self.normal[None] = result.normal
        self.steps[None] = result.steps
        self.termination[None] = result.termination


_readout: _MarchReadout | None = None


def _to_tuple(v: Any) -> tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]))


def march_ray(scene: Any, position: Any, direction: Any) -> MarchRecord:
    """March a single ray from Python.

    This is a Python-callable function for testing and tooling. For
    rendering, use the frame evaluator which marches every pixel in
    parallel.

    Args:
        scene: The scene to march through.
        position: Ray start point (x, y, z).
        direction: Unit ray direction (x, y, z).

    Returns:
        A MarchRecord describing the outcome.
    """
    global _readout
    if _readout is None:
        _readout = _MarchReadout()

    _readout.run(scene, vec3(*position), vec3(*direction))
    return MarchRecord(
        hit=bool(_readout.hit[None]),
        distance_traveled=float(_readout.traveled[None]),
        point=_to_tuple(_readout.point[None]),
        normal=_to_tuple(_readout.normal[None]),
        steps=int(_readout.steps[None]),
        termination=TERMINATION_NAMES[int(_readout.termination[None])],
    )
