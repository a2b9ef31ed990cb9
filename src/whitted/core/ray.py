"""Ray data structure and vector utilities for the Whitted ray tracer.

This module provides the Ray dataclass and the small set of vector helpers
the shader needs: reflection, Snell refraction and surface offsetting. All
functions are Taichi functions and are meant to be called from kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def probe() -> vec3:
    ...     ray = Ray(origin=vec3(0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Distance a secondary ray origin is pushed off the surface it starts on
SURFACE_OFFSET = 1e-3

# Sentinel distance for "no intersection"
INF = float("inf")


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Expected to be unit
            length; nothing in the tracer renormalizes it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t."""
    return ray.origin + t * ray.direction


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector.
        normal: The surface normal. Must be unit length.

    Returns:
        incident - 2 * dot(incident, normal) * normal
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def refract(incident: vec3, normal: vec3, refractive_index: ti.f32):
    """Refract an incident vector through a surface using Snell's law.

    The normal is assumed to point out of the medium. When the incident
    direction is on the same side as the normal the ray is leaving the
    medium, so the indices are swapped and the normal is flipped.

    Args:
        incident: The incoming direction (unit length).
        normal: The outward surface normal (unit length).
        refractive_index: Index of refraction of the medium; the outside
            is assumed to be air (index 1).

    Returns:
        A tuple of (direction, valid) where:
        - direction: The unnormalized refracted direction, or the zero
          vector under total internal reflection.
        - valid: 1 if a refracted ray exists, 0 on total internal reflection.
    """
    cos_i = -tm.clamp(tm.dot(incident, normal), -1.0, 1.0)
    eta_i = 1.0
    eta_t = refractive_index
    n = normal
    if cos_i < 0.0:
        # Leaving the medium
        cos_i = -cos_i
        eta_i = refractive_index
        eta_t = 1.0
        n = -normal
    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)

    direction = vec3(0.0, 0.0, 0.0)
    valid = 0
    if k >= 0.0:
        direction = eta * incident + n * (eta * cos_i - ti.sqrt(k))
        valid = 1
    return direction, valid


@ti.func
def offset_origin(point: vec3, normal: vec3, direction: vec3) -> vec3:
    """Offset a ray origin off the surface to avoid self-intersection.

    The point is pushed SURFACE_OFFSET along the normal, toward the side
    the new ray travels into.

    Args:
        point: The surface point.
        normal: The surface normal at the point.
        direction: The direction of the ray that will start at the point.

    Returns:
        The offset origin.
    """
    offset_dir = normal
    if tm.dot(direction, normal) < 0.0:
        offset_dir = -normal
    return point + SURFACE_OFFSET * offset_dir
