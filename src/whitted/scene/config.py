"""Scene configuration (dict / JSON) serialization.

A scene file names its materials once and lets entities refer to them by
name, so entities sharing a material share the same Material object after
loading:

    {
        "background": [0.0, 0.0, 0.0],
        "materials": {
            "ivory": {"refractive_index": 1.0, "color": [0.4, 0.4, 0.3],
                      "albedo": [0.6, 0.3, 0.1, 0.0], "specular_exponent": 50}
        },
        "entities": [
            {"type": "sphere", "center": [-3, 0, -16], "radius": 3, "material": "ivory"},
            {"type": "plane", "center": [0, -5, 0], "material": "ivory"}
        ],
        "lights": [{"position": [-20, 20, 20], "intensity": 1.5}],
        "render": {"width": 640, "height": 480, "fov": 1.0471975512, "camera": [0, 0, 0]}
    }

The "render" section is optional and holds RenderSettings.

Example:
    >>> from whitted.scene.config import load_scene_file
    >>> scene, settings = load_scene_file("scene.json")
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from whitted.camera.pinhole import DEFAULT_FOV, RenderSettings
from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material
from whitted.scene.scene import Light, Scene


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: Material configurations keyed by name.
        entities: Entity configurations in scene order.
        lights: Light configurations.
        background: Background colour.
        render: Optional render settings configuration.
    """

    materials: dict[str, dict[str, Any]] = field(default_factory=dict)
    entities: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    background: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    render: dict[str, Any] | None = None


def _vec3(value: Any, what: str) -> tuple[float, float, float]:
    if value is None or len(value) != 3:
        raise ValueError(f"{what} must have 3 components, got {value!r}")
    return (float(value[0]), float(value[1]), float(value[2]))


def _require(config: dict[str, Any], key: str, what: str) -> Any:
    if key not in config:
        raise ValueError(f"{what} is missing required key '{key}'")
    return config[key]


def material_from_dict(config: dict[str, Any]) -> Material:
    """Build a Material from its configuration.

    Raises:
        ValueError: If a key is missing or a value is invalid.
    """
    albedo = _require(config, "albedo", "Material")
    if len(albedo) != 4:
        raise ValueError(f"Material albedo must have 4 weights, got {albedo!r}")
    return Material(
        refractive_index=float(config.get("refractive_index", 1.0)),
        color=_vec3(_require(config, "color", "Material"), "Material color"),
        albedo=(float(albedo[0]), float(albedo[1]), float(albedo[2]), float(albedo[3])),
        specular_exponent=int(_require(config, "specular_exponent", "Material")),
    )


def material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "refractive_index": material.refractive_index,
        "color": list(material.color),
        "albedo": list(material.albedo),
        "specular_exponent": material.specular_exponent,
    }


def render_settings_from_dict(config: dict[str, Any]) -> RenderSettings:
    """Build RenderSettings from its configuration.

    Raises:
        ValueError: If a key is missing or a value is invalid.
    """
    return RenderSettings(
        width=int(_require(config, "width", "Render settings")),
        height=int(_require(config, "height", "Render settings")),
        fov=float(config.get("fov", DEFAULT_FOV)),
        camera=_vec3(config.get("camera", (0.0, 0.0, 0.0)), "Camera position"),
    )


def render_settings_to_dict(settings: RenderSettings) -> dict[str, Any]:
    return {
        "width": settings.width,
        "height": settings.height,
        "fov": settings.fov,
        "camera": list(settings.camera),
    }


def scene_from_config(config: SceneConfig) -> Scene:
    """Build a Scene from a configuration object.

    Args:
        config: The scene configuration to load.

    Returns:
        The immutable scene.

    Raises:
        ValueError: If the configuration contains invalid data.
    """
    materials = {name: material_from_dict(mat) for name, mat in config.materials.items()}

    entities: list[Sphere | Plane] = []
    for entity_config in config.entities:
        material_name = _require(entity_config, "material", "Entity")
        if material_name not in materials:
            raise ValueError(f"Unknown material: {material_name}")
        material = materials[material_name]

        entity_type = str(entity_config.get("type", "")).lower()
        center = _vec3(_require(entity_config, "center", "Entity"), "Entity center")
        if entity_type == "sphere":
            radius = float(_require(entity_config, "radius", "Sphere"))
            entities.append(Sphere(center=center, radius=radius, material=material))
        elif entity_type == "plane":
            entities.append(Plane(center=center, material=material))
        else:
            raise ValueError(f"Unknown entity type: {entity_type}")

    lights = [
        Light(
            position=_vec3(_require(light_config, "position", "Light"), "Light position"),
            intensity=float(_require(light_config, "intensity", "Light")),
        )
        for light_config in config.lights
    ]

    return Scene(
        entities=tuple(entities),
        lights=tuple(lights),
        background=_vec3(config.background, "Background"),
    )


def scene_to_config(scene: Scene, settings: RenderSettings | None = None) -> SceneConfig:
    """Export a scene (and optional render settings) to a configuration object.

    Materials are named material_0, material_1, ... in first-use order.
    """
    config = SceneConfig(background=list(scene.background))

    names: dict[int, str] = {}
    for index, material in enumerate(scene.materials):
        name = f"material_{index}"
        names[id(material)] = name
        config.materials[name] = material_to_dict(material)

    for entity in scene.entities:
        if isinstance(entity, Sphere):
            config.entities.append(
                {
                    "type": "sphere",
                    "center": list(entity.center),
                    "radius": entity.radius,
                    "material": names[id(entity.material)],
                }
            )
        else:
            config.entities.append(
                {
                    "type": "plane",
                    "center": list(entity.center),
                    "material": names[id(entity.material)],
                }
            )

    for light in scene.lights:
        config.lights.append({"position": list(light.position), "intensity": light.intensity})

    if settings is not None:
        config.render = render_settings_to_dict(settings)

    return config


def scene_from_dict(data: dict[str, Any]) -> tuple[Scene, RenderSettings | None]:
    """Load a scene from a dictionary.

    Args:
        data: Dictionary with 'materials', 'entities', 'lights', 'background'
            and optionally 'render' keys.

    Returns:
        Tuple of (scene, render settings or None).

    Raises:
        ValueError: If the dictionary contains invalid data.
    """
    config = SceneConfig(
        materials=data.get("materials", {}),
        entities=data.get("entities", []),
        lights=data.get("lights", []),
        background=data.get("background", [0.0, 0.0, 0.0]),
        render=data.get("render"),
    )
    scene = scene_from_config(config)
    settings = render_settings_from_dict(config.render) if config.render is not None else None
    return scene, settings


def scene_to_dict(scene: Scene, settings: RenderSettings | None = None) -> dict[str, Any]:
    """Export a scene to a dictionary (for JSON serialization)."""
    config = scene_to_config(scene, settings)
    data: dict[str, Any] = {
        "background": config.background,
        "materials": config.materials,
        "entities": config.entities,
        "lights": config.lights,
    }
    if config.render is not None:
        data["render"] = config.render
    return data


def load_scene_file(path: str | Path) -> tuple[Scene, RenderSettings | None]:
    """Load a scene from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid scene file {path}: {e}") from e
    return scene_from_dict(data)


def save_scene_file(
    path: str | Path,
    scene: Scene,
    settings: RenderSettings | None = None,
) -> Path:
    """Write a scene (and optional render settings) to a JSON file."""
    output = Path(path)
    output.write_text(json.dumps(scene_to_dict(scene, settings), indent=2))
    return output
