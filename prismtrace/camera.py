"""
Camera module for generating primary rays.

The camera sits at a center point and looks down the -Z axis at a virtual
viewport 2.0 world units high, placed focal_length in front of it. Each
pixel maps to a point on that viewport; the primary ray goes from the
camera center through it.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vector import Vec3, Point3
from .ray import Ray

VIEWPORT_HEIGHT = 2.0


def image_height_for(image_width: int, aspect_ratio: float) -> int:
    """Image height for a width and aspect ratio, at least 1 pixel."""
    return max(1, int(image_width / aspect_ratio))


def get_ray_direction(
    pos_v: int,
    pos_u: int,
    image_width: int,
    aspect_ratio: float,
    focal_length: float,
    camera_center: Point3
) -> Vec3:
    """Unit direction from the camera center through a pixel.

    Args:
        pos_v: Pixel row (0 = top)
        pos_u: Pixel column (0 = left)
        image_width: Image width in pixels
        aspect_ratio: Width / Height ratio
        focal_length: Distance from the camera center to the viewport
        camera_center: Camera position in world space

    Returns:
        Normalized ray direction
    """
    image_height = image_height_for(image_width, aspect_ratio)

    viewport_width = VIEWPORT_HEIGHT * (image_width / image_height)

    # Vectors across the horizontal and down the vertical viewport edges
    viewport_u = Vec3(viewport_width, 0.0, 0.0)
    viewport_v = Vec3(0.0, -VIEWPORT_HEIGHT, 0.0)

    pixel_delta_u = viewport_u / image_width
    pixel_delta_v = viewport_v / image_height

    viewport_upper_left = (
        camera_center
        - Vec3(0.0, 0.0, focal_length)
        - 0.5 * viewport_u
        - 0.5 * viewport_v
    )

    pixel_position = viewport_upper_left + pos_u * pixel_delta_u + pos_v * pixel_delta_v

    return (pixel_position - camera_center).normalize()


@dataclass(frozen=True)
class Camera:
    """A pinhole camera looking down -Z."""
    center: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    focal_length: float = 2.0
    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 960

    def __post_init__(self):
        if self.image_width < 1:
            raise ValueError(f"image_width must be >= 1, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.focal_length <= 0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")

    @property
    def image_height(self) -> int:
        return image_height_for(self.image_width, self.aspect_ratio)

    def get_ray_direction(self, pos_v: int, pos_u: int) -> Vec3:
        return get_ray_direction(
            pos_v, pos_u, self.image_width, self.aspect_ratio,
            self.focal_length, self.center
        )

    def get_ray(self, pos_v: int, pos_u: int) -> Ray:
        """Generate the primary ray for a pixel (row, column)."""
        return Ray(self.center, self.get_ray_direction(pos_v, pos_u))
