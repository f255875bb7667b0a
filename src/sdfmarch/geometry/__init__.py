"""Geometry module for signed distance field primitives and combinators.

This module provides the implicit shapes scenes are built from:

Components:
    field: The distance field contract and argument validation
    primitives: Sphere and axis-aligned cube
    combinators: Intersection (And), subtraction (Not) and union

Every field evaluates ``distance(p)`` as a Taichi function inside render
kernels and ``evaluate(points)`` with NumPy on the host. Fields are
immutable and may be shared freely between scenes and frames.
"""

from .combinators import And, Intersect, Not, Subtract, Union
from .field import DistanceField
from .primitives import Cube, Sphere

__all__ = [
    "DistanceField",
    "Sphere",
    "Cube",
    "Intersect",
    "Subtract",
    "Union",
    "And",
    "Not",
]
