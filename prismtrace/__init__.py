"""
PrismTrace - A Python Whitted-style Ray Tracer

Renders scenes of spheres with:
- Lambertian shading with hard shadows and ambient light
- Mirror reflection
- Dielectric refraction (Snell's law, total internal reflection)
- Schlick's Fresnel approximation
- Multi-threaded per-row rendering
"""

__version__ = "0.1.0"

from .vector import Vector, Vec2, Vec3, Point3, Color, vector_type
from .ray import Ray
from .shapes import Sphere, IntersectionContext
from .materials import (
    Material, Hittable, PRESETS,
    MATTE_WHITE, MATTE_RED, MATTE_GREEN, MATTE_BLUE, MATTE_BLACK, MIRROR, GLASS
)
from .lights import PointLight
from .scene import Scene, Hit
from .shading import lambertian, schlick_approximation, refract, SHADOW_BIAS, SHADOW_REACH
from .tracer import ray_color
from .camera import Camera, get_ray_direction, image_height_for
from .renderer import Renderer, RenderSettings
from .scene_parser import SceneParser, load_scene, parse_scene
from .scenes import SCENES, get_scene, cornell_box
from .errors import PrismTraceError, SceneParseError, SceneFrozenError, UnknownSceneError
