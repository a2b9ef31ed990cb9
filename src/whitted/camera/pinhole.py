"""Fixed-orientation pinhole camera.

The camera sits at RenderSettings.camera and always looks down -Z with +Y
up. Pixel (i, j), with i the column from the left and j the row from the
top, maps to the camera-space direction

    x =  (2 * (i + 0.5) / width  - 1) * tan(fov / 2) * width / height
    y = -(2 * (j + 0.5) / height - 1) * tan(fov / 2)
    direction = normalize(x, y, -1)

so fov is the vertical field of view and the horizontal extent follows the
aspect ratio.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.camera.pinhole import RenderSettings, setup_camera
    >>> settings = RenderSettings(width=640, height=480, fov=math.pi / 3)
    >>> setup_camera(settings)
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from whitted.core.ray import Ray, vec3

# Field of view of the reference render
DEFAULT_FOV = math.pi / 3.0

# =============================================================================
# Render Settings
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Image size and camera for one render.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        fov: Vertical field of view in radians, in (0, pi).
        camera: Camera position in world space (x, y, z).

    Raises:
        ValueError: If any attribute is outside its valid range.
    """

    width: int
    height: int
    fov: float = DEFAULT_FOV
    camera: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if int(self.width) != self.width or self.width <= 0:
            raise ValueError(f"Image width must be a positive integer, got {self.width}")
        if int(self.height) != self.height or self.height <= 0:
            raise ValueError(f"Image height must be a positive integer, got {self.height}")
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {self.fov}")
        object.__setattr__(self, "camera", tuple(self.camera))

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

# Camera origin (position)
_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# tan(fov / 2), the half-height of the image plane at unit distance
_tan_half_fov = ti.field(dtype=ti.f32, shape=())


def setup_camera(settings: RenderSettings) -> None:
    """Initialize camera state from render settings.

    Must be called before any kernel that generates primary rays.

    Args:
        settings: The render settings holding camera position and FOV.
    """
    _camera_origin[None] = vec3(*settings.camera)
    _tan_half_fov[None] = math.tan(settings.fov / 2.0)


@ti.func
def primary_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of a pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with unit-length direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    scale = _tan_half_fov[None]

    x = (2.0 * (ti.cast(pixel_i, ti.f32) + 0.5) / w - 1.0) * scale * w / h
    y = -(2.0 * (ti.cast(pixel_j, ti.f32) + 0.5) / h - 1.0) * scale

    return Ray(origin=_camera_origin[None], direction=tm.normalize(vec3(x, y, -1.0)))


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the camera origin and tan(fov / 2).
    """
    origin = _camera_origin[None]
    return {
        "origin": (float(origin[0]), float(origin[1]), float(origin[2])),
        "tan_half_fov": float(_tan_half_fov[None]),
    }
