"""
Scene container: the objects and lights to render.

Traversal is a linear scan over all objects. A scene is built once, frozen
and then only read while rays are traced, so any number of pixels can be
evaluated concurrently against it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence
import math

from .errors import SceneFrozenError
from .lights import PointLight
from .materials import Hittable, Material, MATTE_BLACK
from .ray import Ray
from .shapes import IntersectionContext, Sphere
from .vector import Point3


@dataclass(frozen=True)
class Hit:
    """The nearest object along a ray and where it was hit."""
    obj: Hittable
    context: IntersectionContext

    @property
    def material(self) -> Material:
        return self.obj.material


class Scene:
    """An ordered collection of hittable objects and point lights."""

    def __init__(self, objects: Optional[Iterable[Hittable]] = None,
                 lights: Optional[Iterable[PointLight]] = None):
        self._objects = list(objects) if objects is not None else []
        self._lights = list(lights) if lights is not None else []
        self._frozen = False

    @property
    def objects(self) -> Sequence[Hittable]:
        return self._objects

    @property
    def lights(self) -> Sequence[PointLight]:
        return self._lights

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise SceneFrozenError("scene is frozen and cannot be modified")

    def add_object(self, obj: Hittable) -> None:
        """Add an object to the scene."""
        self._check_mutable()
        self._objects.append(obj)

    def add_sphere(self, center: Point3, radius: float, material: Material = MATTE_BLACK) -> Hittable:
        """Create a sphere object, add it and return it."""
        obj = Hittable(Sphere(center, radius), material)
        self.add_object(obj)
        return obj

    def add_light(self, light: PointLight) -> None:
        """Add a point light to the scene."""
        self._check_mutable()
        self._lights.append(light)

    def freeze(self) -> Scene:
        """Make the scene read-only. Returns self for chaining."""
        if not self._frozen:
            self._objects = tuple(self._objects)
            self._lights = tuple(self._lights)
            self._frozen = True
        return self

    def nearest_hit(self, ray: Ray) -> Optional[Hit]:
        """Find the closest intersection among all objects.

        Ties on exactly equal distances go to the object added first.
        """
        closest: Optional[Hit] = None
        closest_t = math.inf

        for obj in self._objects:
            context = obj.geometry.intersect(ray)
            if context is not None and context.t < closest_t:
                closest = Hit(obj, context)
                closest_t = context.t

        return closest

    def is_occluded(self, shadow_ray: Ray) -> bool:
        """Check whether any object blocks the ray between t = 0 and t = 1."""
        return any(obj.geometry.intersects_segment(shadow_ray) for obj in self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self):
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, lights={len(self._lights)})"
