"""Tests for recursive Whitted shading.

Scenes are kept to one or two entities so the expected colours can be
worked out by hand. Rays are cast with trace_ray(), which runs cast_ray()
in a kernel on the loaded scene.
"""

import math

import pytest

BACKGROUND = (0.2, 0.7, 0.8)


def _load(entities, lights=(), background=BACKGROUND):
    from whitted.scene.intersection import load_scene
    from whitted.scene.scene import Scene

    load_scene(Scene(entities=entities, lights=lights, background=background))


class TestBackground:
    """Rays that hit nothing or have no depth left return the background."""

    def test_miss_returns_background(self, matte_material):
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere

        _load([Sphere((0.0, 0.0, -10.0), 2.0, matte_material)])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert color == pytest.approx(BACKGROUND, abs=1e-6)

    def test_empty_scene_returns_background(self):
        from whitted.core.frame import trace_ray

        _load([])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(BACKGROUND, abs=1e-6)

    def test_zero_depth_returns_background(self, matte_material):
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        _load(
            [Sphere((0.0, 0.0, -10.0), 2.0, matte_material)],
            lights=[Light((0.0, 0.0, 0.0), 1.0)],
        )

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), depth=0)
        assert color == pytest.approx(BACKGROUND, abs=1e-6)


class TestDirectLighting:
    """Diffuse and specular terms with hard shadows."""

    def test_diffuse_value(self, matte_material):
        """Test a head-on diffuse hit lit from the camera position."""
        from whitted.core.frame import trace_ray
        from whitted.core.ray import SURFACE_OFFSET
        from whitted.core.shader import LIGHT_FALLOFF_SCALE
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        _load(
            [Sphere((0.0, 0.0, -10.0), 2.0, matte_material)],
            lights=[Light((0.0, 0.0, 0.0), 1.0)],
        )

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        # Hit at z = -8, normal (0, 0, 1), shadow origin lifted off the surface
        light_distance = 8.0 - SURFACE_OFFSET
        diffuse = LIGHT_FALLOFF_SCALE / (light_distance * light_distance)
        expected = tuple(c * diffuse for c in matte_material.color)
        assert color == pytest.approx(expected, rel=1e-4)

    def test_specular_highlight_is_white(self):
        """Test a specular-only material shades equal in every channel."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.materials.material import Material
        from whitted.scene.scene import Light

        shiny = Material(1.0, (0.9, 0.1, 0.1), (0.0, 1.0, 0.0, 0.0), 10)
        _load(
            [Sphere((0.0, 0.0, -10.0), 2.0, shiny)],
            lights=[Light((0.0, 0.0, 0.0), 1.0)],
        )

        r, g, b = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert r > 0.0
        assert r == pytest.approx(g, rel=1e-6)
        assert r == pytest.approx(b, rel=1e-6)

    def test_light_contributions_add(self, matte_material):
        """Test two identical lights give twice the colour of one."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        sphere = Sphere((0.0, 0.0, -10.0), 2.0, matte_material)
        light = Light((0.0, 0.0, 0.0), 1.0)

        _load([sphere], lights=[light])
        single = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        _load([sphere], lights=[light, light])
        double = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert double == pytest.approx(tuple(2.0 * c for c in single), rel=1e-5)

    def test_occluded_light_contributes_nothing(self, matte_material):
        """Test a sphere between the surface and the light casts a hard shadow."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        target = Sphere((0.0, 0.0, -10.0), 2.0, matte_material)
        light = Light((0.0, 20.0, 0.0), 1.0)

        _load([target], lights=[light])
        lit = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        # Blocker sits on the segment from the hit point (0, 0, -8) to the light
        blocker = Sphere((0.0, 10.0, -4.0), 1.0, matte_material)
        _load([target, blocker], lights=[light])
        shadowed = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert lit[0] > 0.0
        assert shadowed == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_light_behind_surface_contributes_nothing(self, matte_material):
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        _load(
            [Sphere((0.0, 0.0, -10.0), 2.0, matte_material)],
            lights=[Light((0.0, 0.0, -30.0), 1.0)],
        )

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)


class TestSecondaryRays:
    """Reflection and refraction."""

    def test_mirror_reflects_background(self, mirror_material):
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere

        _load([Sphere((0.0, 0.0, -10.0), 2.0, mirror_material)])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(BACKGROUND, abs=1e-5)

    def test_reflective_weight_scales_reflection(self):
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.materials.material import Material

        half_mirror = Material(1.0, (1.0, 1.0, 1.0), (0.0, 0.0, 0.5, 0.0), 1)
        _load([Sphere((0.0, 0.0, -10.0), 2.0, half_mirror)])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(tuple(0.5 * c for c in BACKGROUND), abs=1e-5)

    def test_mirror_reflects_lit_sphere(self, mirror_material, matte_material):
        """Test a mirror facing a lit sphere picks up its colour."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.scene.scene import Light

        # Ray travels down -Z, bounces straight back off the mirror toward +Z
        _load(
            [
                Sphere((0.0, 0.0, -10.0), 2.0, mirror_material),
                Sphere((0.0, 0.0, 10.0), 2.0, matte_material),
            ],
            lights=[Light((0.0, 0.0, 0.0), 1.0)],
            background=(0.0, 0.0, 0.0),
        )

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color[0] > 0.0
        assert color[2] < color[0]

    def test_clear_sphere_is_invisible(self, clear_material):
        """Test index 1 refraction passes the background straight through."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere

        _load([Sphere((0.0, 0.0, -10.0), 2.0, clear_material)])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(BACKGROUND, abs=1e-5)

    def test_glass_sphere_head_on_passes_background(self):
        """Test a ray enters a dense sphere and leaves through its far side."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.materials.material import Material

        glass = Material(1.5, (1.0, 1.0, 1.0), (0.0, 0.0, 0.0, 1.0), 1)
        _load([Sphere((0.0, 0.0, -10.0), 2.0, glass)])

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert color == pytest.approx(BACKGROUND, abs=1e-5)

    def test_total_internal_reflection_contributes_nothing(self):
        """Test a grazing ray trapped inside a dense sphere adds no refracted colour."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere
        from whitted.materials.material import Material

        dense = Material(2.5, (1.0, 1.0, 1.0), (0.0, 0.0, 0.0, 1.0), 1)
        _load([Sphere((0.0, 0.0, 0.0), 2.0, dense)])

        # Leaves the sphere at sin(i) = 0.95, far past the critical angle of 1 / 2.5
        color = trace_ray((0.0, 1.9, 0.0), (1.0, 0.0, 0.0), depth=1)
        assert all(math.isfinite(c) for c in color)
        assert color == (0.0, 0.0, 0.0)

    def test_depth_limits_recursion(self, mirror_material):
        """Test two facing mirrors stay finite and end in the background."""
        from whitted.core.frame import trace_ray
        from whitted.geometry.sphere import Sphere

        _load(
            [
                Sphere((0.0, 0.0, -10.0), 2.0, mirror_material),
                Sphere((0.0, 0.0, 10.0), 2.0, mirror_material),
            ]
        )

        for depth in (1, 2, 3):
            color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), depth=depth)
            assert color == pytest.approx(BACKGROUND, abs=1e-5)
