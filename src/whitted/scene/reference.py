"""Reference scene configuration.

The classic test scene for this tracer: four spheres (ivory, two mirrors,
red) above a blue floor plane, lit by three point lights, on a black
background, seen from the origin with a 60 degree field of view.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.reference import create_reference_scene
    >>> scene, settings = create_reference_scene(width=640, height=480)
"""

import math

from whitted.camera.pinhole import RenderSettings
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material
from whitted.scene.scene import Light, Scene

# =============================================================================
# Reference Materials
# =============================================================================

RED = Material(1.0, (0.3, 0.1, 0.1), (0.9, 0.1, 0.0, 0.0), 10)
IVORY = Material(1.0, (0.4, 0.4, 0.3), (0.6, 0.3, 0.1, 0.0), 50)
BLUE = Material(1.0, (0.2, 0.2, 0.5), (0.5, 0.3, 0.0, 0.0), 8)
MIRROR = Material(1.0, (1.0, 1.0, 1.0), (0.0, 10.0, 0.8, 0.0), 1250)
GLASS = Material(1.5, (0.6, 0.7, 0.8), (0.0, 0.5, 0.1, 0.8), 125)

# =============================================================================
# Reference Render Settings
# =============================================================================

REFERENCE_WIDTH = 2000
REFERENCE_HEIGHT = 1500
REFERENCE_FOV = math.pi / 3.0
REFERENCE_CAMERA = (0.0, 0.0, 0.0)


def create_reference_scene(
    width: int = REFERENCE_WIDTH,
    height: int = REFERENCE_HEIGHT,
    fov: float = REFERENCE_FOV,
) -> tuple[Scene, RenderSettings]:
    """Create the reference scene and its render settings.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.

    Returns:
        Tuple of (scene, render settings).
    """
    entities = (
        Sphere(center=(-3.0, 0.0, -16.0), radius=3.0, material=IVORY),
        Sphere(center=(-1.0, -1.5, -12.0), radius=2.0, material=MIRROR),
        Sphere(center=(7.0, 5.0, -18.0), radius=4.0, material=MIRROR),
        Sphere(center=(1.5, -0.5, -18.0), radius=3.0, material=RED),
        Plane(center=(0.0, -5.0, 0.0), material=BLUE),
    )
    lights = (
        Light(position=(-20.0, 20.0, 20.0), intensity=1.5),
        Light(position=(30.0, 50.0, -25.0), intensity=1.8),
        Light(position=(30.0, 20.0, 30.0), intensity=1.7),
    )
    scene = Scene(entities=entities, lights=lights, background=(0.0, 0.0, 0.0))
    settings = RenderSettings(width=width, height=height, fov=fov, camera=REFERENCE_CAMERA)
    return scene, settings
