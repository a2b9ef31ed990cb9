"""Infinite plane primitive.

A plane is described by a single point, ``center``. Its normal is not given
separately: it is normalize(-center), i.e. the plane faces back toward the
world origin. The plane through (0, -5, 0), for example, is the floor y = -5
facing up. Planes that do not face the origin cannot be expressed.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import taichi as ti
import taichi.math as tm

from whitted.core.ray import INF, Ray, vec3

if TYPE_CHECKING:
    from whitted.materials.material import Material

# Rays whose direction is this close to perpendicular to the normal are
# treated as parallel to the plane
PARALLEL_EPSILON = 1e-8


@dataclass(frozen=True)
class Plane:
    """An infinite plane through ``center`` facing the world origin.

    Attributes:
        center: A point on the plane; -center is the normal direction.
        material: The material shading the plane.

    Raises:
        ValueError: If center is the origin (the normal would be undefined).
    """

    center: tuple[float, float, float]
    material: "Material"

    def __post_init__(self) -> None:
        if all(c == 0.0 for c in self.center):
            raise ValueError("Plane center must not be the origin")


@ti.func
def intersect_plane(ray: Ray, center: vec3) -> ti.f32:
    """Distance along the ray to the plane.

    Args:
        ray: The ray to test (unit-length direction).
        center: The plane's defining point.

    Returns:
        The hit distance, or INF for rays parallel to the plane or hitting
        it behind the origin.
    """
    denom = tm.dot(ray.direction, center)
    t = INF
    if ti.abs(denom) > PARALLEL_EPSILON:
        k = tm.dot(center - ray.origin, center) / denom
        if k >= 0.0:
            t = k
    return t


@ti.func
def plane_normal(center: vec3) -> vec3:
    """Unit normal of the plane, the same at every point."""
    return tm.normalize(-center)
