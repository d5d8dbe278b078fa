"""
Recursive color evaluation.

ray_color() is a pure function of the ray, the remaining depth and the
scene. Each call either terminates (depth exhausted, miss, diffuse
surface) or recurses into reflected and transmitted rays with one less
level of depth.
"""

from __future__ import annotations

from .vector import Color
from .ray import Ray
from .scene import Hit, Scene
from .shading import SHADOW_BIAS, SHADOW_REACH, lambertian, refract


def _black() -> Color:
    return Color(0.0, 0.0, 0.0)


def reflected_ray(ray: Ray, hit: Hit) -> Ray:
    """Mirror ray leaving the hit point, offset along the normal."""
    context = hit.context
    origin = context.intersection_point + SHADOW_BIAS * context.normal
    direction = (SHADOW_REACH * ray.direction).get_reflective(context.normal)
    return Ray(origin, direction)


def ray_color(ray: Ray, depth: int, scene: Scene) -> Color:
    """Compute the color seen along a ray.

    Args:
        ray: The ray to trace
        depth: Remaining recursion budget; 0 or less absorbs the ray
        scene: The scene to trace against

    Returns:
        RGB color of this ray
    """
    if depth <= 0:
        return _black()

    hit = scene.nearest_hit(ray)
    if hit is None:
        return _black()

    material = hit.material
    reflectivity = material.reflectivity
    transparency = material.transparency

    if reflectivity > 0.0:
        reflection = reflectivity * ray_color(reflected_ray(ray, hit), depth - 1, scene)
        if transparency > 0.0:
            refracted = refract(ray, material, hit.context)
            if refracted is not None:
                transmission = transparency * ray_color(refracted, depth - 1, scene)
                return 0.5 * (reflection + transmission)
        # Total internal reflection falls back to the mirror term
        return reflection

    if transparency > 0.0:
        refracted = refract(ray, material, hit.context)
        if refracted is None:
            return _black()
        return transparency * ray_color(refracted, depth - 1, scene)

    return lambertian(hit, scene)
