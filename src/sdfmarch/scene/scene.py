"""Scene container: an ordered set of top-level distance fields.

The scene distance at a point is the minimum over its fields, so the
nearest surface governs every marching step. The scene is read-only while
a frame renders and is shared by reference across all pixel tasks.

Normal source:
    "nearest": normals are estimated from the scene minimum, i.e. from
        whichever field is actually closest to the hit point.
    "first": normals are always estimated from the first field, regardless
        of which field was hit. Only exact for single-field scenes, or when
        the first field is the only one a ray can reach.

Example:
    >>> from sdfmarch.geometry import Sphere
    >>> from sdfmarch.scene.scene import Scene
    >>> scene = Scene([Sphere((0, 0, 3), 1.0), Sphere((0, 101, 3), 100.0)])
    >>> len(scene)
    2
"""

from collections.abc import Iterable
from typing import Any, Literal, get_args

import numpy as np
import numpy.typing as npt
import taichi as ti

from sdfmarch.core.ray import vec3
from sdfmarch.geometry.field import DistanceField, as_field

# Type alias for the normal estimation source
NormalSource = Literal["nearest", "first"]

# Distance reported before any field is considered (well beyond any budget)
FAR_AWAY = 1e30


@ti.data_oriented
class Scene:
    """An immutable, non-empty, ordered collection of distance fields.

    Attributes:
        fields: The top-level fields, in insertion order.
        normal_source: Which distance the normal estimator differentiates.
    """

    def __init__(
        self,
        fields: Iterable[Any],
        normal_source: NormalSource = "nearest",
    ) -> None:
        """Build a scene.

        Args:
            fields: Top-level distance fields. Must not be empty.
            normal_source: "nearest" (default) or "first".

        Raises:
            ValueError: If no fields are given or normal_source is unknown.
            TypeError: If an entry is not a distance field.
        """
        checked = tuple(as_field(f, f"fields[{i}]") for i, f in enumerate(fields))
        if not checked:
            raise ValueError("A scene needs at least one distance field")
        if normal_source not in get_args(NormalSource):
            raise ValueError(f"Unknown normal source: {normal_source}")

        self.fields: tuple[DistanceField, ...] = checked
        self.normal_source = normal_source
        self._first = checked[0]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __repr__(self) -> str:
        return f"Scene({list(self.fields)!r}, normal_source={self.normal_source!r})"

    @ti.func
    def distance(self, p: vec3) -> ti.f32:
        """Minimum signed distance from p over all fields."""
        d = FAR_AWAY
        for field in ti.static(self.fields):
            d = ti.min(d, field.distance(p))
        return d

    @ti.func
    def normal_distance(self, p: vec3) -> ti.f32:
        """The distance function whose gradient gives surface normals."""
        d = 0.0
        if ti.static(self.normal_source == "first"):
            d = self._first.distance(p)
        else:
            d = self.distance(p)
        return d

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Minimum signed distance for an array of points of shape (..., 3)."""
        distances = [field.evaluate(points) for field in self.fields]
        return np.minimum.reduce(distances)

    def nearest_index(self, point: Any) -> int:
        """Index of the field closest to a single point (host side)."""
        distances = [float(field.evaluate(point)) for field in self.fields]
        return int(np.argmin(distances))
