"""Core rendering module.

Components:
    ray: Ray data structure, reflection/refraction and surface offsetting
    shader: Recursive Whitted shading (cast_ray)
    frame: Framebuffer, full-frame render kernel and single-ray entry points
    renderer: Convenience wrapper tying scene upload, rendering and export

Note: shader, frame and renderer are NOT imported here because they declare
Taichi fields at import time. Import them directly after ti.init(), e.g.
    from whitted.core.frame import render_frame
"""

from .ray import (
    INF,
    SURFACE_OFFSET,
    Ray,
    offset_origin,
    ray_at,
    reflect,
    refract,
    vec3,
)

__all__ = [
    "Ray",
    "ray_at",
    "reflect",
    "refract",
    "offset_origin",
    "vec3",
    "INF",
    "SURFACE_OFFSET",
]
