"""Scene module for scene description and ray-scene queries.

Components:
    scene: Immutable Scene and Light descriptions
    intersection: Taichi entity/light tables, load_scene() and nearest_hit()
    config: Dict/JSON serialization of scenes and render settings
    reference: The reference scene (spheres over a floor, three lights)

Scene data is organized for efficient GPU access:
    - One ordered, kind-tagged entity table (Structure-of-Arrays)
    - Shared material table addressed by index
    - Flat light table

The intersection, config and reference modules declare or pull in Taichi
fields at import time and are not imported here. Import them directly
after ti.init().
"""

from .scene import Entity, Light, Scene

__all__ = [
    "Scene",
    "Light",
    "Entity",
]
