"""
Point light sources for the ray tracer.

Point lights emit white light equally in all directions from a single
point. They produce hard shadows and are not attenuated by distance.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vector import Point3, Vec3


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light
        intensity: Brightness multiplier
    """
    position: Point3
    intensity: float = 1.0

    def direction_from(self, point: Point3) -> Vec3:
        """Unnormalized offset from a surface point to the light."""
        return self.position - point
