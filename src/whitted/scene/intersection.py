"""Scene tables and nearest-hit queries.

The scene lives in Taichi fields so kernels can read it directly. Entities
of every kind share one ordered table tagged with an EntityKind; a sphere
uses center and radius, a plane only center. Keeping a single table
preserves scene order, which decides ties between equidistant hits.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import load_scene, nearest_hit
    >>> from whitted.scene.reference import create_reference_scene
    >>> scene, settings = create_reference_scene()
    >>> load_scene(scene)
    >>> # Use nearest_hit(ray) within a Taichi kernel
"""

from enum import IntEnum

import taichi as ti

from whitted.core.ray import INF, Ray, vec3
from whitted.geometry.plane import Plane, intersect_plane, plane_normal
from whitted.geometry.sphere import Sphere, intersect_sphere, sphere_normal
from whitted.materials.table import add_material, clear_materials
from whitted.scene.scene import Light, Scene


class EntityKind(IntEnum):
    """Tag selecting the intersection and normal routines of an entity."""

    SPHERE = 0
    PLANE = 1


# Maximum number of entities and lights supported in the scene
MAX_ENTITIES = 1024
MAX_LIGHTS = 64

# Entity storage: Structure of Arrays layout, one row per entity in scene order
entity_kinds = ti.field(dtype=ti.i32, shape=MAX_ENTITIES)
entity_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_ENTITIES)
entity_radii = ti.field(dtype=ti.f32, shape=MAX_ENTITIES)
entity_material_ids = ti.field(dtype=ti.i32, shape=MAX_ENTITIES)
num_entities = ti.field(dtype=ti.i32, shape=())

# Point lights
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Colour for rays that escape or run out of depth
background_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_scene() -> None:
    """Clear all entities, lights and materials and reset the background to black."""
    num_entities[None] = 0
    num_lights[None] = 0
    background_color[None] = vec3(0.0, 0.0, 0.0)
    clear_materials()


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int) -> int:
    """Append a sphere to the entity table.

    Returns:
        The index of the added entity.

    Raises:
        RuntimeError: If the maximum number of entities is exceeded.
    """
    idx = _next_entity_index()
    entity_kinds[idx] = int(EntityKind.SPHERE)
    entity_centers[idx] = vec3(*center)
    entity_radii[idx] = radius
    entity_material_ids[idx] = material_id
    num_entities[None] = idx + 1
    return idx


def add_plane(center: tuple[float, float, float], material_id: int) -> int:
    """Append a plane to the entity table.

    Returns:
        The index of the added entity.

    Raises:
        RuntimeError: If the maximum number of entities is exceeded.
    """
    idx = _next_entity_index()
    entity_kinds[idx] = int(EntityKind.PLANE)
    entity_centers[idx] = vec3(*center)
    entity_radii[idx] = 0.0
    entity_material_ids[idx] = material_id
    num_entities[None] = idx + 1
    return idx


def _next_entity_index() -> int:
    idx = num_entities[None]
    if idx >= MAX_ENTITIES:
        raise RuntimeError(f"Maximum number of entities ({MAX_ENTITIES}) exceeded")
    return idx


def add_light(light: Light) -> int:
    """Append a point light.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = vec3(*light.position)
    light_intensities[idx] = light.intensity
    num_lights[None] = idx + 1
    return idx


def load_scene(scene: Scene) -> None:
    """Upload a scene description into the Taichi tables.

    Replaces whatever was loaded before. Each distinct material object is
    stored once and shared by the entities referencing it.

    Args:
        scene: The scene to upload.

    Raises:
        RuntimeError: If the scene exceeds a table capacity.
    """
    clear_scene()

    material_ids: dict[int, int] = {}
    for material in scene.materials:
        material_ids[id(material)] = add_material(material)

    for entity in scene.entities:
        material_id = material_ids[id(entity.material)]
        if isinstance(entity, Sphere):
            add_sphere(entity.center, entity.radius, material_id)
        elif isinstance(entity, Plane):
            add_plane(entity.center, material_id)

    for light in scene.lights:
        add_light(light)

    background_color[None] = vec3(*scene.background)


def get_entity_count() -> int:
    """Get the number of entities in the scene."""
    return int(num_entities[None])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def intersect_entity(ray: Ray, entity_idx: ti.i32) -> ti.f32:
    """Distance to one entity, dispatched on its kind (INF when missed)."""
    t = INF
    kind = entity_kinds[entity_idx]
    if kind == int(EntityKind.SPHERE):
        t = intersect_sphere(ray, entity_centers[entity_idx], entity_radii[entity_idx])
    elif kind == int(EntityKind.PLANE):
        t = intersect_plane(ray, entity_centers[entity_idx])
    return t


@ti.func
def entity_normal(entity_idx: ti.i32, point: vec3) -> vec3:
    """Unit surface normal of an entity at a point on its surface."""
    normal = vec3(0.0, 0.0, 0.0)
    kind = entity_kinds[entity_idx]
    if kind == int(EntityKind.SPHERE):
        normal = sphere_normal(point, entity_centers[entity_idx])
    elif kind == int(EntityKind.PLANE):
        normal = plane_normal(entity_centers[entity_idx])
    return normal


@ti.func
def entity_material_id(entity_idx: ti.i32) -> ti.i32:
    return entity_material_ids[entity_idx]


@ti.func
def nearest_hit(ray: Ray):
    """Find the closest entity along a ray.

    Tests every entity in scene order. A strictly smaller distance is
    required to replace the current best, so of two equidistant entities
    the one listed first is kept.

    Args:
        ray: The ray to trace.

    Returns:
        A tuple of (distance, entity_idx); (INF, -1) when nothing is hit.
    """
    closest_t = INF
    closest_idx = -1
    for i in range(num_entities[None]):
        t = intersect_entity(ray, i)
        if t < closest_t:
            closest_t = t
            closest_idx = i
    return closest_t, closest_idx


@ti.func
def get_light_position(light_idx: ti.i32) -> vec3:
    return light_positions[light_idx]


@ti.func
def get_light_intensity(light_idx: ti.i32) -> ti.f32:
    return light_intensities[light_idx]


@ti.func
def get_background() -> vec3:
    return background_color[None]


@ti.func
def light_count() -> ti.i32:
    return num_lights[None]
