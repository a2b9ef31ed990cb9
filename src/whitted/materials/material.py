"""Phong material description.

A material carries four independent weights, the "albedo" of the classic
Whitted shader:

    albedo = (diffuse, specular, reflective, refractive)

They do not need to sum to one; each scales its own additive contribution
to the final colour. A weight of zero switches the corresponding term off,
and for the reflective and refractive terms it also skips the secondary ray.

Example:
    >>> from whitted.materials.material import Material
    >>> glass = Material(
    ...     refractive_index=1.5,
    ...     color=(0.6, 0.7, 0.8),
    ...     albedo=(0.0, 0.5, 0.1, 0.8),
    ...     specular_exponent=125,
    ... )
"""

from dataclasses import dataclass

# Indices into Material.albedo
ALBEDO_DIFFUSE = 0
ALBEDO_SPECULAR = 1
ALBEDO_REFLECTIVE = 2
ALBEDO_REFRACTIVE = 3


@dataclass(frozen=True)
class Material:
    """Surface properties shared by every entity that uses them.

    Attributes:
        refractive_index: Index of refraction of the medium. Must be >= 1.0.
        color: Base (diffuse) colour as (R, G, B).
        albedo: Weights (diffuse, specular, reflective, refractive).
            Each must be non-negative.
        specular_exponent: Phong exponent controlling highlight sharpness.
            Must be a positive integer.

    Raises:
        ValueError: If any attribute is outside its valid range.
    """

    refractive_index: float
    color: tuple[float, float, float]
    albedo: tuple[float, float, float, float]
    specular_exponent: int

    def __post_init__(self) -> None:
        if self.refractive_index < 1.0:
            raise ValueError(
                f"Index of refraction = {self.refractive_index} is less than 1.0. "
                "IOR must be >= 1.0 for physically meaningful materials."
            )
        if len(self.color) != 3:
            raise ValueError(f"Material color must have 3 components, got {len(self.color)}")
        if len(self.albedo) != 4:
            raise ValueError(f"Material albedo must have 4 weights, got {len(self.albedo)}")
        for i, weight in enumerate(self.albedo):
            if weight < 0.0:
                raise ValueError(f"Albedo weight {i} = {weight} is negative")
        if int(self.specular_exponent) != self.specular_exponent or self.specular_exponent < 1:
            raise ValueError(
                f"Specular exponent must be a positive integer, got {self.specular_exponent}"
            )
