"""Distance field contract shared by primitives and combinators.

A distance field maps a point to the signed distance to its surface
(negative inside, positive outside). Every implementation must be
Lipschitz-1: no surface lies closer to ``p`` than ``|distance(p)|``. The
marcher steps by that value, so a field that overestimates can tunnel
through geometry.

Fields expose the capability twice:
    distance(p): a ``@ti.func`` used inside render kernels. Nested fields
        are resolved when the kernel is compiled, so any tree of
        combinators collapses into straight-line code.
    evaluate(points): a NumPy evaluation over arrays of shape (..., 3)
        for host-side inspection and tests.
"""

import math
from typing import Any, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt


@runtime_checkable
class DistanceField(Protocol):
    """Signed distance field contract."""

    def distance(self, p: Any) -> Any:
        """Signed distance from p to the surface (Taichi scope)."""
        ...

    def evaluate(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Signed distance for an array of points of shape (..., 3)."""
        ...


def as_point(value: Any, name: str = "center") -> tuple[float, float, float]:
    """Validate and convert a 3-component sequence to a tuple of floats.

    Raises:
        ValueError: If value does not have exactly three finite components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")
    if not all(math.isfinite(c) for c in components):
        raise ValueError(f"{name} components must be finite, got {components}")
    return components  # type: ignore[return-value]


def as_extent(value: float, name: str) -> float:
    """Validate a size parameter (radius, half size).

    Raises:
        ValueError: If value is negative or not finite.
    """
    extent = float(value)
    if not math.isfinite(extent) or extent < 0.0:
        raise ValueError(f"{name} must be a finite, non-negative number, got {value}")
    return extent


def as_field(value: Any, name: str) -> DistanceField:
    """Check that an operand provides the distance field capability.

    Raises:
        TypeError: If value is not a distance field.
    """
    if not isinstance(value, DistanceField):
        raise TypeError(f"{name} must be a distance field, got {type(value).__name__}")
    return value


def as_points(points: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Convert input to a float64 array of shape (..., 3)."""
    array = np.asarray(points, dtype=np.float64)
    if array.shape[-1:] != (3,):
        raise ValueError(f"points must have shape (..., 3), got {array.shape}")
    return array
