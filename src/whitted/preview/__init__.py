"""Preview module for rendered output.

Components:
    export: Clamping (NaN -> 0, [0, 1]), gamma encoding and PNG export

Example:
    >>> from whitted.preview import save_png
    >>> save_png(image, "output.png")
"""

from whitted.preview.export import (
    apply_gamma,
    clamp_image,
    image_to_uint8,
    save_png,
)

__all__ = [
    "clamp_image",
    "apply_gamma",
    "image_to_uint8",
    "save_png",
]
