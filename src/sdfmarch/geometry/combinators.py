"""Constructive solid geometry combinators over distance fields.

Each combinator takes two fields of any kind (primitives or other
combinators) and is itself a field, so trees nest without limit. The
combined distance stays a valid Lipschitz-1 bound, though it may
underestimate the true distance away from the surface.

Naming note: the combinator historically called ``And`` (and sometimes
"union") computes ``max(a, b)``, which is set intersection. It is exposed
here as ``Intersect`` with ``And`` kept as an alias. The real union,
``min(a, b)``, is ``Union``.

Example:
    >>> from sdfmarch.geometry import Cube, Intersect, Sphere, Subtract
    >>> rounded = Intersect(Cube((0, 0, 3), 0.8), Sphere((0, 0, 3), 1.0))
    >>> carved = Subtract(rounded, Sphere((0, 0, 3), 0.6))
"""

from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti

from sdfmarch.core.ray import vec3
from sdfmarch.geometry.field import as_field


@ti.data_oriented
class Intersect:
    """Intersection of two solids: inside only where inside both.

    Distance: ``max(left.distance(p), right.distance(p))``.
    """

    def __init__(self, left: Any, right: Any) -> None:
        self.left = as_field(left, "left")
        self.right = as_field(right, "right")

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        return ti.max(self.left.distance(p), self.right.distance(p))

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return np.maximum(self.left.evaluate(points), self.right.evaluate(points))

    def __repr__(self) -> str:
        return f"Intersect({self.left!r}, {self.right!r})"


@ti.data_oriented
class Subtract:
    """Removes the solid region of ``right`` from ``left``.

    Distance: ``max(left.distance(p), -right.distance(p))``.
    """

    def __init__(self, left: Any, right: Any) -> None:
        self.left = as_field(left, "left")
        self.right = as_field(right, "right")

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        return ti.max(self.left.distance(p), -self.right.distance(p))

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return np.maximum(self.left.evaluate(points), -self.right.evaluate(points))

    def __repr__(self) -> str:
        return f"Subtract({self.left!r}, {self.right!r})"


@ti.data_oriented
class Union:
    """Union of two solids: inside where inside either.

    Distance: ``min(left.distance(p), right.distance(p))``.
    """

    def __init__(self, left: Any, right: Any) -> None:
        self.left = as_field(left, "left")
        self.right = as_field(right, "right")

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        return ti.min(self.left.distance(p), self.right.distance(p))

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return np.minimum(self.left.evaluate(points), self.right.evaluate(points))

    def __repr__(self) -> str:
        return f"Union({self.left!r}, {self.right!r})"


# Historical names
And = Intersect
Not = Subtract
