"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with projection-distance intersection
    plane: Infinite plane whose normal is derived from its defining point

Each primitive is a frozen Python dataclass for scene description plus a
pair of Taichi functions used inside kernels:
    distance = intersect_<shape>(ray, ...)   (INF when missed)
    normal = <shape>_normal(...)
"""

from .plane import PARALLEL_EPSILON, Plane, intersect_plane, plane_normal
from .sphere import Sphere, intersect_sphere, sphere_normal

__all__ = [
    "Sphere",
    "intersect_sphere",
    "sphere_normal",
    "Plane",
    "intersect_plane",
    "plane_normal",
    "PARALLEL_EPSILON",
]
