"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-orientation pinhole camera looking down -Z, plus the
        RenderSettings describing image size, field of view and position

Pixel coordinates are (i, j) with i the column from the left and j the row
from the top, matching the row-major framebuffer layout.
"""

from .pinhole import (
    RenderSettings,
    get_camera_info,
    primary_ray,
    setup_camera,
)

__all__ = [
    "RenderSettings",
    "setup_camera",
    "primary_ray",
    "get_camera_info",
]
