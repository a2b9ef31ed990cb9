"""Recursive Whitted shading.

cast_ray() returns the colour seen along a ray. At the nearest hit it sums
four terms, each scaled by its material albedo weight:

    colour = base_colour * diffuse * kd        (Lambert, per unoccluded light)
           + white * specular * ks              (Phong, per unoccluded light)
           + cast_ray(reflected ray) * kr       (if kr > 0)
           + cast_ray(refracted ray) * kt       (if kt > 0 and no total
                                                 internal reflection)

Light falls off as LIGHT_FALLOFF_SCALE / distance^2. Shadows are hard: a
light contributes nothing when anything lies between the surface and it.

The recursion budget ``depth`` is a compile-time template argument, so each
level of reflection/refraction is unrolled by Taichi when the kernel is
compiled and the recursion ends in a ti.static branch at depth 0. Rays that
hit nothing, and every ray cast with depth 0, return the scene background.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.ray import Ray, vec3
    >>> from whitted.core.shader import MAX_DEPTH, cast_ray
    >>> @ti.kernel
    ... def probe(origin: vec3, direction: vec3) -> vec3:
    ...     return cast_ray(Ray(origin=origin, direction=direction), MAX_DEPTH)
"""

import taichi as ti
import taichi.math as tm

from whitted.core.ray import Ray, offset_origin, ray_at, reflect, refract, vec3
from whitted.materials.material import (
    ALBEDO_DIFFUSE,
    ALBEDO_REFLECTIVE,
    ALBEDO_REFRACTIVE,
    ALBEDO_SPECULAR,
)
from whitted.materials.table import (
    get_material_albedo,
    get_material_color,
    get_material_refractive_index,
    get_material_specular_exponent,
)
from whitted.scene.intersection import (
    entity_material_id,
    entity_normal,
    get_background,
    get_light_intensity,
    get_light_position,
    light_count,
    nearest_hit,
)

# =============================================================================
# Shading Constants
# =============================================================================

# Number of reflective/refractive bounces a primary ray may spawn
MAX_DEPTH = 3

# Scale of the inverse-square light falloff, tuned for the reference scene
LIGHT_FALLOFF_SCALE = 3000.0


@ti.func
def direct_lighting(ray: Ray, hit_point: vec3, normal: vec3, specular_exponent: ti.i32):
    """Accumulate diffuse and specular intensity from all visible lights.

    Args:
        ray: The ray that produced the hit (for the specular view direction).
        hit_point: The surface point being shaded.
        normal: The unit surface normal at hit_point.
        specular_exponent: The material's Phong exponent.

    Returns:
        A tuple of (diffuse_intensity, specular_intensity).
    """
    diffuse = 0.0
    specular = 0.0
    for light_idx in range(light_count()):
        light_position = get_light_position(light_idx)
        light_dir = tm.normalize(light_position - hit_point)

        shadow_origin = offset_origin(hit_point, normal, light_dir)
        light_distance = tm.length(light_position - shadow_origin)
        shadow_ray = Ray(
            origin=shadow_origin,
            direction=tm.normalize(light_position - shadow_origin),
        )
        shadow_t, shadow_idx = nearest_hit(shadow_ray)

        if shadow_idx < 0 or shadow_t >= light_distance:
            damping = LIGHT_FALLOFF_SCALE / (light_distance * light_distance)
            intensity = get_light_intensity(light_idx) * damping

            diffuse += ti.max(0.0, tm.dot(normal, light_dir)) * intensity

            specular_cos = ti.max(0.0, tm.dot(-reflect(-light_dir, normal), ray.direction))
            specular += ti.pow(specular_cos, ti.cast(specular_exponent, ti.f32)) * intensity

    return diffuse, specular


@ti.func
def cast_ray(ray: Ray, depth: ti.template()) -> vec3:
    """Colour seen along a ray.

    Args:
        ray: The ray to trace (unit-length direction).
        depth: Remaining recursion budget, a compile-time constant.

    Returns:
        The linear RGB colour. Components may exceed 1.
    """
    color = get_background()
    if ti.static(depth > 0):
        dist, entity_idx = nearest_hit(ray)
        if entity_idx >= 0:
            hit_point = ray_at(ray, dist)
            normal = entity_normal(entity_idx, hit_point)
            material_idx = entity_material_id(entity_idx)
            albedo = get_material_albedo(material_idx)

            diffuse, specular = direct_lighting(
                ray, hit_point, normal, get_material_specular_exponent(material_idx)
            )

            reflected = vec3(0.0, 0.0, 0.0)
            if albedo[ALBEDO_REFLECTIVE] > 0.0:
                reflect_dir = reflect(ray.direction, normal)
                reflect_ray = Ray(
                    origin=offset_origin(hit_point, normal, reflect_dir),
                    direction=reflect_dir,
                )
                reflected = cast_ray(reflect_ray, depth - 1) * albedo[ALBEDO_REFLECTIVE]

            refracted = vec3(0.0, 0.0, 0.0)
            if albedo[ALBEDO_REFRACTIVE] > 0.0:
                refract_dir, valid = refract(
                    ray.direction, normal, get_material_refractive_index(material_idx)
                )
                # Total internal reflection contributes nothing
                if valid == 1:
                    refract_dir = tm.normalize(refract_dir)
                    refract_ray = Ray(
                        origin=offset_origin(hit_point, normal, refract_dir),
                        direction=refract_dir,
                    )
                    refracted = cast_ray(refract_ray, depth - 1) * albedo[ALBEDO_REFRACTIVE]

            color = (
                get_material_color(material_idx) * diffuse * albedo[ALBEDO_DIFFUSE]
                + vec3(1.0, 1.0, 1.0) * specular * albedo[ALBEDO_SPECULAR]
                + reflected
                + refracted
            )
    return color
