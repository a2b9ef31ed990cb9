"""Image export utilities for rendered frames.

The tracer produces linear, unclamped colour that may contain values above
one and, in degenerate cases, NaN or Inf. Everything here first maps the
frame into [0, 1] with clamp_image():

    NaN  -> 0
    +Inf -> 1
    -Inf -> 0
    x    -> min(max(x, 0), 1)

Supported formats:
    - PNG (8-bit via Pillow)

Example:
    >>> from whitted.core.frame import get_frame_numpy
    >>> from whitted.preview.export import save_png
    >>> save_png(get_frame_numpy(), "render.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def clamp_image(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Map a linear image into [0, 1], replacing NaN with 0.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        A float32 copy with every component in [0, 1].
    """
    cleaned = np.nan_to_num(image.astype(np.float32), nan=0.0, posinf=1.0, neginf=0.0)
    return np.clip(cleaned, 0.0, 1.0)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma encoding: out = in^(1/gamma).

    Args:
        image: Image array in [0, 1].
        gamma: Gamma value. 1.0 (the default) leaves values untouched.

    Returns:
        Gamma encoded image.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image
    return np.power(image, 1.0 / gamma).astype(np.float32)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0, values written as-is).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = apply_gamma(clamp_image(image), gamma)
    return (processed * 255).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    gamma: float = 1.0,
) -> Path:
    """Save a linear image array as an 8-bit PNG file.

    Args:
        image: Linear image array of shape (H, W, 3), row 0 at the top.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 1.0).

    Returns:
        The path the image was written to.
    """
    image_uint8 = image_to_uint8(image, gamma=gamma)
    output = Path(filepath)
    PILImage.fromarray(image_uint8).save(output)
    return output
