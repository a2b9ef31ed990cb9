"""Materials module.

Components:
    material: Immutable Phong material description with four albedo weights
    table: Taichi field registry the shader reads materials from

The table module declares Taichi fields at import time and is therefore not
imported here. Import it directly after ti.init():
    from whitted.materials.table import add_material
"""

from .material import (
    ALBEDO_DIFFUSE,
    ALBEDO_REFLECTIVE,
    ALBEDO_REFRACTIVE,
    ALBEDO_SPECULAR,
    Material,
)

__all__ = [
    "Material",
    "ALBEDO_DIFFUSE",
    "ALBEDO_SPECULAR",
    "ALBEDO_REFLECTIVE",
    "ALBEDO_REFRACTIVE",
]
