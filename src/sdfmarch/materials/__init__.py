"""Materials module.

Components:
    diffuse: Fixed 50% albedo diffuse scattering and bounce-ray offsetting

Every surface in a scene shares the same diffuse material; there is no
per-field material assignment.
"""

from .diffuse import ALBEDO, RAY_EPSILON, offset_origin, scatter_diffuse

__all__ = [
    "ALBEDO",
    "RAY_EPSILON",
    "scatter_diffuse",
    "offset_origin",
]
