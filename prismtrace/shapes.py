"""
Geometric shapes for the ray tracer.

Only spheres are supported. A sphere answers two questions about a ray:
whether it is blocked somewhere along a finite segment (shadow rays) and
where it is first hit (camera, reflected and refracted rays).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import math

from .vector import Vec3, Point3
from .ray import Ray


@dataclass(frozen=True)
class IntersectionContext:
    """Stores information about a ray-sphere intersection.

    Attributes:
        t: The ray parameter at intersection
        intersection_point: The intersection point in world space
        normal: Unit surface normal, always pointing out of the sphere.
            Callers flip it when the ray travels inside the object.
    """
    t: float
    intersection_point: Point3
    normal: Vec3


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center and radius."""
    center: Point3
    radius: float

    def __post_init__(self):
        assert self.radius > 0, f"sphere radius must be positive, got {self.radius}"

    def roots(self, ray: Ray) -> Optional[Tuple[float, float]]:
        """Solve |O + tD - C|^2 = r^2 for t.

        The equation expands to t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is the quadratic at² + bt + c = 0.

        Returns:
            (near, far) roots, or None for complex roots or a zero direction
        """
        oc = ray.origin - self.center
        a = ray.direction.square_of_length()
        if a == 0:
            return None
        half_b = oc * ray.direction
        c = oc.square_of_length() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)
        return (-half_b - sqrtd) / a, (-half_b + sqrtd) / a

    def intersects_segment(self, ray: Ray) -> bool:
        """Check for a hit strictly between t = 0 and t = 1."""
        roots = self.roots(ray)
        if roots is None:
            return False
        return any(0.0 < t < 1.0 for t in roots)

    def intersect(self, ray: Ray, t_min: float = 0.0,
                  t_max: float = math.inf) -> Optional[IntersectionContext]:
        """Find the nearest intersection in front of the ray origin.

        When the origin lies inside the sphere only the far root is ahead
        of it, and that one is reported.
        """
        roots = self.roots(ray)
        if roots is None:
            return None

        near, far = roots
        if t_min < near < t_max:
            root = near
        elif t_min < far < t_max:
            root = far
        else:
            return None

        point = ray.at(root)
        normal = (point - self.center) / self.radius
        return IntersectionContext(t=root, intersection_point=point, normal=normal)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
