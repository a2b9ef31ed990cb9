"""Tests for the reference scene."""

import math

import numpy as np
import pytest


class TestReferenceScene:
    def test_default_settings(self):
        from whitted.scene.reference import create_reference_scene

        _, settings = create_reference_scene()

        assert (settings.width, settings.height) == (2000, 1500)
        assert settings.fov == pytest.approx(math.pi / 3.0)
        assert settings.camera == (0.0, 0.0, 0.0)

    def test_contents(self):
        from whitted.geometry.plane import Plane
        from whitted.geometry.sphere import Sphere
        from whitted.scene.reference import BLUE, IVORY, MIRROR, RED, create_reference_scene

        scene, _ = create_reference_scene()

        assert [type(e) for e in scene.entities] == [Sphere, Sphere, Sphere, Sphere, Plane]
        assert [e.material for e in scene.entities] == [IVORY, MIRROR, MIRROR, RED, BLUE]
        assert scene.entities[4].center == (0.0, -5.0, 0.0)
        assert [light.intensity for light in scene.lights] == [1.5, 1.8, 1.7]
        assert scene.background == (0.0, 0.0, 0.0)

    def test_ivory_sphere_visible_left_of_center(self):
        """Test a pixel aimed at the ivory sphere shows a lit ivory surface."""
        from whitted.core.frame import get_frame_numpy, render_frame
        from whitted.scene.intersection import load_scene
        from whitted.scene.reference import create_reference_scene

        scene, settings = create_reference_scene(width=80, height=60)
        load_scene(scene)
        render_frame(settings)
        image = get_frame_numpy()

        # (-3, 1.5, -16) on the ivory sphere projects to (-3/16, 1.5/16) at z = -1,
        # above the nearer mirror sphere
        half_width = math.tan(settings.fov / 2.0) * settings.aspect_ratio
        column = int((-3.0 / 16.0 / half_width + 1.0) / 2.0 * settings.width)
        half_height = math.tan(settings.fov / 2.0)
        row = int((1.0 - 1.5 / 16.0 / half_height) / 2.0 * settings.height)
        pixel = image[row, column]

        assert np.all(pixel > 0.0)
        # Ivory and the white highlight both have red == green
        assert pixel[0] == pytest.approx(pixel[1], rel=1e-3)
