"""Framebuffer and frame rendering kernels.

One primary ray is cast through the center of every pixel and the resulting
linear colour is stored, unclamped, in a preallocated framebuffer indexed
[row, column]. The pixel loop is the outermost loop of the kernel, so Taichi
runs it in parallel; pixels share no mutable state and every render of the
same scene produces the same framebuffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.frame import get_frame_numpy, render_frame
    >>> from whitted.scene.intersection import load_scene
    >>> from whitted.scene.reference import create_reference_scene
    >>>
    >>> scene, settings = create_reference_scene(width=320, height=240)
    >>> load_scene(scene)
    >>> render_frame(settings)
    >>> image = get_frame_numpy()  # (240, 320, 3) linear RGB
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.camera.pinhole import RenderSettings, primary_ray, setup_camera
from whitted.core.ray import Ray, vec3
from whitted.core.shader import MAX_DEPTH, cast_ray

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Linear colour per pixel, indexed [row, column]
_frame_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Allowed deviation of |direction| from 1 for rays traced from Python
UNIT_LENGTH_TOLERANCE = 1e-3


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the framebuffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions exceed maximum supported size.
    """
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    clear_render_target()


def clear_render_target() -> None:
    """Clear the framebuffer to black."""
    _frame_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_depth(depth: int) -> None:
    if int(depth) != depth or depth < 0:
        raise ValueError(f"Recursion depth must be a non-negative integer, got {depth}")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame_kernel(width: ti.i32, height: ti.i32, depth: ti.template()):
    """Cast one primary ray per pixel and store the colour."""
    for j, i in ti.ndrange(height, width):
        _frame_buffer[j, i] = cast_ray(primary_ray(i, j, width, height), depth)


@ti.kernel
def _render_pixel_kernel(
    pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32, depth: ti.template()
) -> vec3:
    return cast_ray(primary_ray(pixel_i, pixel_j, width, height), depth)


@ti.kernel
def _trace_ray_kernel(origin: vec3, direction: vec3, depth: ti.template()) -> vec3:
    return cast_ray(Ray(origin=origin, direction=direction), depth)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_frame(settings: RenderSettings, depth: int = MAX_DEPTH) -> None:
    """Render the loaded scene into the framebuffer.

    Sets up the render target and camera from the settings, then casts one
    ray per pixel. The scene must already be uploaded with load_scene().

    Args:
        settings: Image size, field of view and camera position.
        depth: Recursion budget for reflection/refraction.

    Raises:
        ValueError: If the image is too large or depth is negative.
    """
    _check_depth(depth)
    setup_render_target(settings.width, settings.height)
    setup_camera(settings)
    _render_frame_kernel(settings.width, settings.height, int(depth))


def render_pixel(
    pixel_i: int,
    pixel_j: int,
    settings: RenderSettings,
    depth: int = MAX_DEPTH,
) -> tuple[float, float, float]:
    """Render a single pixel without touching the framebuffer.

    Used for testing and debugging individual pixels.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        settings: Image size, field of view and camera position.
        depth: Recursion budget for reflection/refraction.

    Returns:
        Tuple of (R, G, B) linear colour values.

    Raises:
        ValueError: If the pixel lies outside the image or depth is negative.
    """
    _check_depth(depth)
    if not (0 <= pixel_i < settings.width and 0 <= pixel_j < settings.height):
        raise ValueError(
            f"Pixel ({pixel_i}, {pixel_j}) is outside the "
            f"{settings.width}x{settings.height} image"
        )
    setup_camera(settings)
    color = _render_pixel_kernel(pixel_i, pixel_j, settings.width, settings.height, int(depth))
    return (float(color[0]), float(color[1]), float(color[2]))


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = MAX_DEPTH,
) -> tuple[float, float, float]:
    """Cast a single ray into the loaded scene.

    Args:
        origin: Ray origin (x, y, z).
        direction: Ray direction (x, y, z). Must be unit length.
        depth: Recursion budget for reflection/refraction.

    Returns:
        Tuple of (R, G, B) linear colour values.

    Raises:
        ValueError: If direction is not unit length or depth is negative.
    """
    _check_depth(depth)
    length = math.sqrt(sum(c * c for c in direction))
    if abs(length - 1.0) > UNIT_LENGTH_TOLERANCE:
        raise ValueError(f"Ray direction must be unit length, got |direction| = {length}")
    color = _trace_ray_kernel(vec3(*origin), vec3(*direction), int(depth))
    return (float(color[0]), float(color[1]), float(color[2]))


def get_frame_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Values are linear and unclamped; NaN and Inf are passed through for the
    image encoder to handle.

    Returns:
        NumPy array of shape (height, width, 3), row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _frame_buffer.to_numpy()
    return full_image[:height, :width, :].astype(np.float32)
