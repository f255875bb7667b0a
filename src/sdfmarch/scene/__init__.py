"""Scene module: scene container and preset scenes.

Components:
    scene: Scene, the ordered set of top-level distance fields
    presets: Ready-made scenes and the orbiting camera path

A scene is compiled into each render kernel that uses it, so it must stay
unchanged while frames render. Build a new Scene to change the geometry.
"""

from .presets import (
    GROUND_LEVEL,
    GROUND_RADIUS,
    SUBJECT_CENTER,
    CarvedCubeParams,
    create_carved_cube_scene,
    create_ground,
    create_single_sphere_scene,
    orbit_camera_origin,
)
from .scene import NormalSource, Scene

__all__ = [
    "GROUND_LEVEL",
    "GROUND_RADIUS",
    "SUBJECT_CENTER",
    "Scene",
    "NormalSource",
    "CarvedCubeParams",
    "create_carved_cube_scene",
    "create_ground",
    "create_single_sphere_scene",
    "orbit_camera_origin",
]
