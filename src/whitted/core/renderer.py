"""Convenience renderer tying scene upload, rendering and export together.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.renderer import Renderer
    >>> from whitted.scene.reference import create_reference_scene
    >>>
    >>> scene, settings = create_reference_scene(width=400, height=300)
    >>> renderer = Renderer(scene, settings)
    >>> image = renderer.render()
    >>> renderer.save("reference.png")
"""

from __future__ import annotations

import time
from pathlib import Path

import numpy as np
import numpy.typing as npt

from whitted.camera.pinhole import RenderSettings
from whitted.core.frame import get_frame_numpy, render_frame
from whitted.core.shader import MAX_DEPTH
from whitted.preview.export import save_png
from whitted.scene.intersection import load_scene
from whitted.scene.scene import Scene


class Renderer:
    """Renders one scene with fixed settings.

    The scene is uploaded to the Taichi tables on construction. The tables
    are global, so constructing another Renderer replaces the scene this one
    renders.

    Attributes:
        scene: The scene being rendered.
        settings: Image size and camera.
        depth: Recursion budget for reflection/refraction.
    """

    def __init__(self, scene: Scene, settings: RenderSettings, depth: int = MAX_DEPTH) -> None:
        self._scene = scene
        self._settings = settings
        self._depth = depth
        self._image: npt.NDArray[np.float32] | None = None
        self._render_seconds = 0.0
        load_scene(scene)

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def settings(self) -> RenderSettings:
        return self._settings

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def render_seconds(self) -> float:
        """Wall-clock duration of the last render() call."""
        return self._render_seconds

    def render(self) -> npt.NDArray[np.float32]:
        """Render the frame.

        Returns:
            Linear, unclamped image of shape (height, width, 3).
        """
        start_time = time.perf_counter()
        render_frame(self._settings, self._depth)
        self._image = get_frame_numpy()
        self._render_seconds = time.perf_counter() - start_time
        return self._image

    def save(self, filepath: str | Path, *, gamma: float = 1.0) -> Path:
        """Save the last rendered frame as PNG, rendering first if needed."""
        image = self._image if self._image is not None else self.render()
        return save_png(image, filepath, gamma=gamma)
