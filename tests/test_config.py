"""Tests for scene dict/JSON serialization."""

import json
import math

import pytest


def _minimal_dict():
    return {
        "background": [0.2, 0.7, 0.8],
        "materials": {
            "ivory": {
                "refractive_index": 1.0,
                "color": [0.4, 0.4, 0.3],
                "albedo": [0.6, 0.3, 0.1, 0.0],
                "specular_exponent": 50,
            },
            "glass": {
                "refractive_index": 1.5,
                "color": [0.6, 0.7, 0.8],
                "albedo": [0.0, 0.5, 0.1, 0.8],
                "specular_exponent": 125,
            },
        },
        "entities": [
            {"type": "sphere", "center": [-3, 0, -16], "radius": 3, "material": "ivory"},
            {"type": "sphere", "center": [-1, -1.5, -12], "radius": 2, "material": "glass"},
            {"type": "plane", "center": [0, -5, 0], "material": "ivory"},
        ],
        "lights": [{"position": [-20, 20, 20], "intensity": 1.5}],
    }


class TestSceneFromDict:
    """Tests for scene_from_dict()."""

    def test_loads_entities_in_order(self):
        from whitted.geometry.plane import Plane
        from whitted.geometry.sphere import Sphere
        from whitted.scene.config import scene_from_dict

        scene, settings = scene_from_dict(_minimal_dict())

        assert settings is None
        assert [type(e) for e in scene.entities] == [Sphere, Sphere, Plane]
        assert scene.entities[0].center == (-3.0, 0.0, -16.0)
        assert scene.entities[1].material.refractive_index == 1.5
        assert scene.background == (0.2, 0.7, 0.8)
        assert scene.lights[0].intensity == 1.5

    def test_named_materials_are_shared(self):
        from whitted.scene.config import scene_from_dict

        scene, _ = scene_from_dict(_minimal_dict())

        assert scene.entities[0].material is scene.entities[2].material
        assert len(scene.materials) == 2

    def test_render_section(self):
        from whitted.scene.config import scene_from_dict

        data = _minimal_dict()
        data["render"] = {"width": 320, "height": 240}
        _, settings = scene_from_dict(data)

        assert settings.width == 320
        assert settings.height == 240
        assert settings.fov == pytest.approx(math.pi / 3.0)
        assert settings.camera == (0.0, 0.0, 0.0)

    def test_unknown_material_raises(self):
        from whitted.scene.config import scene_from_dict

        data = _minimal_dict()
        data["entities"][0]["material"] = "gold"
        with pytest.raises(ValueError, match="Unknown material: gold"):
            scene_from_dict(data)

    def test_unknown_entity_type_raises(self):
        from whitted.scene.config import scene_from_dict

        data = _minimal_dict()
        data["entities"][0]["type"] = "cube"
        with pytest.raises(ValueError, match="Unknown entity type: cube"):
            scene_from_dict(data)

    def test_missing_key_raises(self):
        from whitted.scene.config import scene_from_dict

        data = _minimal_dict()
        del data["entities"][0]["radius"]
        with pytest.raises(ValueError, match="missing required key 'radius'"):
            scene_from_dict(data)

    def test_invalid_material_value_raises(self):
        from whitted.scene.config import scene_from_dict

        data = _minimal_dict()
        data["materials"]["glass"]["refractive_index"] = 0.5
        with pytest.raises(ValueError, match="IOR must be >= 1.0"):
            scene_from_dict(data)


class TestSceneToDict:
    """Tests for scene_to_dict() and the round trip through it."""

    def test_reference_scene_round_trip(self):
        from whitted.scene.config import scene_from_dict, scene_to_dict
        from whitted.scene.reference import create_reference_scene

        scene, settings = create_reference_scene(width=200, height=150)
        loaded, loaded_settings = scene_from_dict(scene_to_dict(scene, settings))

        assert loaded == scene
        assert loaded_settings == settings
        assert len(loaded.materials) == len(scene.materials)

    def test_material_names(self):
        from whitted.scene.config import scene_to_dict
        from whitted.scene.reference import create_reference_scene

        scene, _ = create_reference_scene()
        data = scene_to_dict(scene)

        assert sorted(data["materials"]) == ["material_0", "material_1", "material_2", "material_3"]
        assert data["entities"][1]["material"] == data["entities"][2]["material"]
        assert "render" not in data


class TestSceneFile:
    """Tests for JSON scene files."""

    def test_save_and_load(self, tmp_path):
        from whitted.scene.config import load_scene_file, save_scene_file
        from whitted.scene.reference import create_reference_scene

        scene, settings = create_reference_scene(width=64, height=48)
        path = save_scene_file(tmp_path / "scene.json", scene, settings)

        assert json.loads(path.read_text())["render"]["width"] == 64
        loaded, loaded_settings = load_scene_file(path)
        assert loaded == scene
        assert loaded_settings == settings

    def test_invalid_json_raises(self, tmp_path):
        from whitted.scene.config import load_scene_file

        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid scene file"):
            load_scene_file(path)

    def test_example_scene_file_loads(self):
        from pathlib import Path

        from whitted.scene.config import load_scene_file

        path = Path(__file__).parent.parent / "examples" / "glass_scene.json"
        scene, settings = load_scene_file(path)

        assert any(e.material.refractive_index > 1.0 for e in scene.entities)
        assert settings is not None
