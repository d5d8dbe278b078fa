"""
Local shading models.

Implements:
- Lambertian diffuse lighting with hard shadows and an ambient term
- Schlick's approximation of Fresnel reflectance
- Snell's law refraction with total internal reflection detection
"""

from __future__ import annotations
from typing import Optional
import math

from .vector import Vec3, Color
from .ray import Ray
from .materials import Material
from .scene import Hit, Scene
from .shapes import IntersectionContext

# Offset along a secondary ray's direction that keeps it from hitting the
# surface it starts on (shadow acne).
SHADOW_BIAS = 0.08
# Shadow rays stop at this fraction of the distance to the light.
SHADOW_REACH = 0.92


def lambertian(hit: Optional[Hit], scene: Scene) -> Color:
    """Diffuse color of a hit point lit by every unoccluded scene light.

    The direct term is averaged over the lights, so adding lights does not
    brighten the image without bound.

    Args:
        hit: The nearest hit, or None if the ray missed everything
        scene: The scene supplying lights and occluders

    Returns:
        Color of the surface, black on a miss
    """
    if hit is None:
        return Color(0.0, 0.0, 0.0)

    context = hit.context
    point = context.intersection_point
    lights = scene.lights
    total_light_intensity = 0.0

    for light in lights:
        to_light = light.direction_from(point)
        to_light_normalized = to_light.normalized()

        shadow_ray = Ray(point + SHADOW_BIAS * to_light_normalized, SHADOW_REACH * to_light)
        if not scene.is_occluded(shadow_ray):
            total_light_intensity += light.intensity * max(0.0, context.normal * to_light_normalized)

    if lights:
        total_light_intensity /= len(lights)

    material = hit.material
    return (material.ambient_const + total_light_intensity) * material.color


def schlick_approximation(incoming: Vec3, normal: Vec3, material: Material) -> float:
    """Fresnel reflectance at a surface using Schlick's approximation.

    Args:
        incoming: Direction of the incident ray (unit length)
        normal: Outward surface normal (unit length)
        material: Material supplying the refractive index

    Returns:
        Reflectance in [0, 1]; 1 on total internal reflection
    """
    n = material.refractive_index
    cos_x = -(normal * incoming)
    cos_x = max(-1.0, min(1.0, cos_x))

    r0 = (1.0 - n) / (1.0 + n) if cos_x > 0 else (n - 1.0) / (n + 1.0)
    r0 *= r0

    if n > 1.0:
        sin_t2 = n * n * (1.0 - cos_x * cos_x)
        if sin_t2 > 1.0:
            return 1.0
        cos_x = math.sqrt(1.0 - sin_t2)
    else:
        cos_x = abs(cos_x)

    x = 1.0 - cos_x
    return r0 + (1.0 - r0) * x ** 5


def refract(ray: Ray, material: Material, context: IntersectionContext) -> Optional[Ray]:
    """Bend a ray through the surface of a dielectric.

    Entering or leaving the material is decided by the side of the surface
    the ray arrives from; when leaving, the indices swap and the normal is
    flipped.

    Returns:
        The transmitted ray, or None on total internal reflection
    """
    normal = context.normal
    n1 = 1.0
    n2 = material.refractive_index

    cos_theta = -(normal * ray.direction)
    if cos_theta < 0.0:
        n1, n2 = n2, n1
        cos_theta = -cos_theta
        normal = -normal

    ratio = n1 / n2
    sin_theta = ratio * math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    if sin_theta > 1.0:
        return None

    cos_phi = math.sqrt(max(0.0, 1.0 - sin_theta * sin_theta))
    direction = ratio * ray.direction + (ratio * cos_theta - cos_phi) * normal
    origin = context.intersection_point + SHADOW_BIAS * direction
    return Ray(origin, direction)
