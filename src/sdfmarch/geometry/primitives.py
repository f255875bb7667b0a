"""Primitive signed distance fields: sphere and axis-aligned cube.

Primitives are immutable once built. Their parameters are baked into the
render kernel as constants when a scene using them is compiled, so a new
primitive means a new kernel compilation rather than a field upload.

Example:
    >>> from sdfmarch.geometry.primitives import Cube, Sphere
    >>> sphere = Sphere(center=(0.0, 0.0, 3.0), radius=1.0)
    >>> cube = Cube(center=(0.0, 0.0, 3.0), half_size=0.8)
    >>> float(sphere.evaluate((0.0, 0.0, 0.0)))
    2.0
"""

from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from sdfmarch.core.ray import length, max_component, vec3
from sdfmarch.geometry.field import as_extent, as_point, as_points


@ti.data_oriented
class Sphere:
    """A sphere defined by center point and radius.

    Distance: ``length(p - center) - radius``. A zero radius is accepted and
    behaves as a point.

    Attributes:
        center: The center point of the sphere (x, y, z).
        radius: The radius of the sphere (non-negative).
    """

    def __init__(self, center: Any, radius: float) -> None:
        self.center = as_point(center, "center")
        self.radius = as_extent(radius, "radius")
        self._center = vec3(*self.center)

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        """Signed distance from p to the sphere surface."""
        return length(p - self._center) - self.radius

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Signed distance for an array of points of shape (..., 3)."""
        p = as_points(points)
        return np.linalg.norm(p - np.asarray(self.center), axis=-1) - self.radius

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


@ti.data_oriented
class Cube:
    """An axis-aligned cube defined by center point and half edge length.

    Distance, with ``q = abs(p - center) - half_size`` componentwise::

        length(max(q, 0)) + min(max_component(q), 0)

    This is the exact distance for an axis-aligned cube: the first term is
    the distance outside, the second the (negative) distance inside.

    Attributes:
        center: The center point of the cube (x, y, z).
        half_size: Half of the edge length (non-negative).
    """

    def __init__(self, center: Any, half_size: float) -> None:
        self.center = as_point(center, "center")
        self.half_size = as_extent(half_size, "half_size")
        self._center = vec3(*self.center)

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        """Signed distance from p to the cube surface."""
        q = ti.abs(p - self._center) - self.half_size
        return length(tm.max(q, vec3(0.0, 0.0, 0.0))) + ti.min(max_component(q), 0.0)

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Signed distance for an array of points of shape (..., 3)."""
        p = as_points(points)
        q = np.abs(p - np.asarray(self.center)) - self.half_size
        outside = np.linalg.norm(np.maximum(q, 0.0), axis=-1)
        inside = np.minimum(np.max(q, axis=-1), 0.0)
        return outside + inside

    def __repr__(self) -> str:
        return f"Cube(center={self.center}, half_size={self.half_size})"
