"""
Surface materials and the objects that carry them.

A material mixes three behaviours, selected by its fields rather than by
subclass:
- Lambertian diffuse with an ambient term (the default)
- Mirror reflection (reflectivity > 0)
- Dielectric transmission (is_transmissive, with a refractive index)

Materials are immutable and shared by reference, so the presets below can
be used by any number of objects.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .vector import Color
from .shapes import Sphere


@dataclass(frozen=True)
class Material:
    """Surface description of an object.

    Attributes:
        color: Base color (RGB, each component 0-1)
        ambient_const: Light added regardless of the light sources
        refractive_index: Index of refraction (1.0 = vacuum, 1.5 = glass)
        reflectivity: Fraction of light mirrored (0-1)
        is_transmissive: Whether light is refracted through the object
    """
    color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))
    ambient_const: float = 0.3
    refractive_index: float = 1.0
    reflectivity: float = 0.0
    is_transmissive: bool = False

    def __post_init__(self):
        # Presets are shared, so the color is copied and made read-only
        color = Color.from_array(self.color.to_array())
        color._data.flags.writeable = False
        object.__setattr__(self, 'color', color)

        if self.ambient_const < 0:
            raise ValueError(f"ambient_const must be >= 0, got {self.ambient_const}")
        if self.refractive_index < 1.0:
            raise ValueError(f"refractive_index must be >= 1, got {self.refractive_index}")
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"reflectivity must be in [0, 1], got {self.reflectivity}")

    @property
    def is_reflective(self) -> bool:
        return self.reflectivity > 0.0

    @property
    def transparency(self) -> float:
        """Weight of the transmitted ray (0 for opaque materials)."""
        return 1.0 - self.reflectivity if self.is_transmissive else 0.0


MATTE_WHITE = Material(Color(0.8, 0.8, 0.8), 0.25)
MATTE_RED = Material(Color(0.8, 0.3, 0.3), 0.25)
MATTE_GREEN = Material(Color(0.3, 0.8, 0.3), 0.25)
MATTE_BLUE = Material(Color(0.3, 0.3, 0.8), 0.25)
MATTE_BLACK = Material(Color(0.2, 0.2, 0.2), 0.25)

MIRROR = Material(Color(0.0, 0.0, 0.0), 0.25, 1.0, 0.9, False)
GLASS = Material(Color(1.0, 1.0, 1.0), 0.25, 1.52, 0.9, True)

PRESETS: Dict[str, Material] = {
    'matte_white': MATTE_WHITE,
    'matte_red': MATTE_RED,
    'matte_green': MATTE_GREEN,
    'matte_blue': MATTE_BLUE,
    'matte_black': MATTE_BLACK,
    'mirror': MIRROR,
    'glass': GLASS,
}


@dataclass(frozen=True)
class Hittable:
    """A renderable object: a sphere and the material of its surface."""
    geometry: Sphere
    material: Material = MATTE_BLACK
