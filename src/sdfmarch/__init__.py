"""Signed distance field renderer built on Taichi.

This package renders scenes made of implicit shapes by sphere marching rays
through their distance field, with support for:
- Sphere and cube primitives with intersection, subtraction and union
- Normals from central finite differences of the field
- Multi-bounce diffuse light transport under a sky gradient
- Jittered multi-sample anti-aliasing
- Parallel per-pixel frame evaluation with per-pixel random streams

Subpackages:
    core: Rays, random streams, marcher, integrator, frame evaluation, color
    geometry: Distance field primitives and combinators
    scene: Scene container and preset scenes
    camera: Pixel to primary ray mapping
    materials: Diffuse scattering
    preview: PNG export, Matplotlib display and interactive window
"""

__version__ = "0.1.0"
