"""Immutable scene description.

A Scene is built once, uploaded to the Taichi tables with load_scene() and
then only read while rendering. Entity order matters for one thing: when two
entities are hit at exactly the same distance the one listed first wins.

Example:
    >>> from whitted.geometry import Plane, Sphere
    >>> from whitted.materials import Material
    >>> from whitted.scene.scene import Light, Scene
    >>> blue = Material(1.0, (0.2, 0.2, 0.5), (0.5, 0.3, 0.0, 0.0), 8)
    >>> scene = Scene(
    ...     entities=(Sphere((0.0, 0.0, -10.0), 2.0, blue), Plane((0.0, -5.0, 0.0), blue)),
    ...     lights=(Light((-20.0, 20.0, 20.0), 1.5),),
    ...     background=(0.0, 0.0, 0.0),
    ... )
"""

from dataclasses import dataclass, field

from whitted.geometry.plane import Plane
from whitted.geometry.sphere import Sphere
from whitted.materials.material import Material

# Closed set of renderable primitives
Entity = Sphere | Plane


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Light position in world space (x, y, z).
        intensity: Scalar brightness. Must be positive.

    Raises:
        ValueError: If intensity is not positive.
    """

    position: tuple[float, float, float]
    intensity: float

    def __post_init__(self) -> None:
        if not self.intensity > 0.0:
            raise ValueError(f"Light intensity must be positive, got {self.intensity}")


@dataclass(frozen=True)
class Scene:
    """Entities, lights and background colour for one render.

    Attributes:
        entities: Primitives in scene order.
        lights: Point lights.
        background: Colour returned for rays that hit nothing or run out of
            recursion depth.
    """

    entities: tuple[Entity, ...] = field(default_factory=tuple)
    lights: tuple[Light, ...] = field(default_factory=tuple)
    background: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so the scene stays immutable
        object.__setattr__(self, "entities", tuple(self.entities))
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "background", tuple(self.background))
        if len(self.background) != 3:
            raise ValueError(f"Scene background must have 3 components, got {len(self.background)}")
        for entity in self.entities:
            if not isinstance(entity, (Sphere, Plane)):
                raise ValueError(f"Unsupported entity type: {type(entity).__name__}")

    @property
    def materials(self) -> list[Material]:
        """Distinct materials in first-use order (compared by identity)."""
        seen: dict[int, Material] = {}
        for entity in self.entities:
            seen.setdefault(id(entity.material), entity.material)
        return list(seen.values())
