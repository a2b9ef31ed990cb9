"""Whitted-style recursive ray tracer built on Taichi.

The renderer casts one primary ray per pixel into a scene of spheres and
infinite planes lit by point lights, and shades every hit with diffuse and
Phong specular terms plus recursive reflection and refraction.

Subpackages:
    core: Ray utilities, the recursive shader and the frame render kernel
    geometry: Sphere and plane primitives
    materials: Phong material description and material table
    scene: Scene description, GPU entity tables, config and reference scene
    camera: Fixed-orientation pinhole camera and render settings
    preview: Image clamping and PNG export
"""

__version__ = "0.1.0"
