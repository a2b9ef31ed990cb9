"""Material registry stored in Taichi fields.

Materials are uploaded once per scene and addressed by index from the
entity table. The shader reads them through the accessor functions below.
"""

import taichi as ti
import taichi.math as tm

from whitted.materials.material import Material

# Type alias for 3D vectors
vec3 = tm.vec3
vec4 = tm.vec4

# Maximum number of distinct materials in the scene
MAX_MATERIALS = 256

# Storage for material properties (Structure of Arrays)
material_refractive_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(4, dtype=ti.f32, shape=MAX_MATERIALS)
material_specular_exponents = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material: Material) -> int:
    """Add a material to the registry.

    Args:
        material: The material to upload.

    Returns:
        The index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_refractive_indices[idx] = material.refractive_index
    material_colors[idx] = vec3(*material.color)
    material_albedos[idx] = vec4(*material.albedo)
    material_specular_exponents[idx] = int(material.specular_exponent)
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material_color(material_idx: ti.i32) -> vec3:
    return material_colors[material_idx]


@ti.func
def get_material_albedo(material_idx: ti.i32) -> vec4:
    """Get the (diffuse, specular, reflective, refractive) weights."""
    return material_albedos[material_idx]


@ti.func
def get_material_refractive_index(material_idx: ti.i32) -> ti.f32:
    return material_refractive_indices[material_idx]


@ti.func
def get_material_specular_exponent(material_idx: ti.i32) -> ti.i32:
    return material_specular_exponents[material_idx]
