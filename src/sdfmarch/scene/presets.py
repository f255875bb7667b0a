"""Ready-made scenes and camera paths.

The world uses the pixel buffer's orientation: the camera looks down +Z,
+X points right and +Y points *down* the screen (row 0 of the buffer is the
top of the picture). A "ground" is therefore a large sphere centered at
positive Y.

Example:
    >>> from sdfmarch.scene.presets import create_carved_cube_scene
    >>> from sdfmarch.core.frame import render_frame
    >>> scene = create_carved_cube_scene()
    >>> pixels = render_frame(scene, (0.0, 0.0, 0.0), 160, 120, 10)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sdfmarch.geometry import Cube, Intersect, Sphere, Subtract
from sdfmarch.scene.scene import NormalSource, Scene

# =============================================================================
# Preset Constants
# =============================================================================

# Where the subject of every preset sits, in front of a camera at the origin
SUBJECT_CENTER = (0.0, 0.0, 3.0)

# Ground: a huge sphere whose top touches y = GROUND_LEVEL
GROUND_RADIUS = 100.0
GROUND_LEVEL = 1.0


@dataclass(frozen=True)
class CarvedCubeParams:
    """Parameters for the carved cube preset.

    Attributes:
        cube_half_size: Half edge of the cube the shape is cut from.
        rounding_radius: Radius of the sphere intersected with the cube;
            between half_size and half_size * sqrt(3) it rounds the corners.
        carve_center: Center of the sphere removed from the shape.
        carve_radius: Radius of the sphere removed from the shape.
        with_ground: Whether to add the ground sphere.
    """

    cube_half_size: float = 0.8
    rounding_radius: float = 1.0
    carve_center: tuple[float, float, float] = (0.55, -0.55, 2.3)
    carve_radius: float = 0.6
    with_ground: bool = True


def create_ground() -> Sphere:
    """Create the ground sphere below (screen-wise) the subject."""
    center = (0.0, GROUND_LEVEL + GROUND_RADIUS, SUBJECT_CENTER[2])
    return Sphere(center=center, radius=GROUND_RADIUS)


def create_single_sphere_scene(
    center: tuple[float, float, float] = SUBJECT_CENTER,
    radius: float = 1.0,
) -> Scene:
    """Create a scene holding one sphere, by default of radius 1 at (0, 0, 3)."""
    return Scene([Sphere(center=center, radius=radius)])


def create_carved_cube_scene(
    params: CarvedCubeParams | None = None,
    normal_source: NormalSource = "nearest",
) -> Scene:
    """Create a rounded cube with a spherical bite taken out of one corner.

    The shape is ``(cube AND sphere) NOT carve``, optionally standing over the
    ground sphere.

    Args:
        params: Optional shape parameters. Defaults to CarvedCubeParams().
        normal_source: Forwarded to Scene.

    Returns:
        The assembled scene. The carved shape is always the first field.
    """
    if params is None:
        params = CarvedCubeParams()

    rounded = Intersect(
        Cube(center=SUBJECT_CENTER, half_size=params.cube_half_size),
        Sphere(center=SUBJECT_CENTER, radius=params.rounding_radius),
    )
    carved = Subtract(rounded, Sphere(center=params.carve_center, radius=params.carve_radius))

    fields = [carved]
    if params.with_ground:
        fields.append(create_ground())
    return Scene(fields, normal_source=normal_source)


def orbit_camera_origin(
    elapsed: float,
    *,
    radius: float = 0.5,
    speed: float = 1.0,
    base: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> tuple[float, float, float]:
    """Camera origin circling ``base`` in the image plane.

    Args:
        elapsed: Wall-clock seconds since the animation started.
        radius: Radius of the circle.
        speed: Angular speed in radians per second.
        base: Center of the circle.

    Returns:
        The camera origin for this moment.
    """
    angle = speed * elapsed
    return (
        base[0] + radius * math.cos(angle),
        base[1] + radius * math.sin(angle),
        base[2],
    )
