"""Sphere primitive with projection-distance ray intersection.

The intersection projects the vector from the ray origin to the sphere
center onto the ray direction, which needs a single square root and no
quadratic coefficients:

    vco  = center - origin
    k    = dot(direction, vco)           (distance to the closest approach)
    temp = dot(vco, vco) - radius^2

For an origin outside the sphere the near root k - sqrt(k^2 - temp) is the
hit distance. For an origin inside the sphere the near root is behind the
ray, so the far root k + sqrt(k^2 - temp) is returned instead.

Example:
    >>> from whitted.geometry.sphere import Sphere
    >>> from whitted.materials.material import Material
    >>> ivory = Material(1.0, (0.4, 0.4, 0.3), (0.6, 0.3, 0.1, 0.0), 50)
    >>> sphere = Sphere(center=(-3.0, 0.0, -16.0), radius=3.0, material=ivory)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import taichi as ti
import taichi.math as tm

from whitted.core.ray import INF, Ray, vec3

if TYPE_CHECKING:
    from whitted.materials.material import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere (x, y, z).
        radius: The radius of the sphere. Must be positive.
        material: The material shading the sphere surface.

    Raises:
        ValueError: If radius is not positive.
    """

    center: tuple[float, float, float]
    radius: float
    material: "Material"

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")


@ti.func
def intersect_sphere(ray: Ray, center: vec3, radius: ti.f32) -> ti.f32:
    """Distance along the ray to the first sphere intersection in front of it.

    Args:
        ray: The ray to test (unit-length direction).
        center: The sphere center.
        radius: The sphere radius.

    Returns:
        The hit distance, or INF when the sphere lies behind the ray or the
        ray passes beside it.
    """
    vco = center - ray.origin
    k = tm.dot(ray.direction, vco)
    temp = tm.dot(vco, vco) - radius * radius

    t = INF
    if temp < 0.0:
        # Origin inside the sphere: exit point is always ahead
        t = k + ti.sqrt(k * k - temp)
    elif k >= 0.0 and k * k >= temp:
        t = k - ti.sqrt(k * k - temp)
    return t


@ti.func
def sphere_normal(point: vec3, center: vec3) -> vec3:
    """Outward unit normal of a sphere at a surface point."""
    return tm.normalize(point - center)
