"""Built-in demo scenes."""

from __future__ import annotations
import logging
from typing import Callable, Dict

from .vector import Point3
from .errors import UnknownSceneError
from .lights import PointLight
from .materials import (
    MATTE_WHITE, MATTE_RED, MATTE_GREEN, MATTE_BLUE, MIRROR, GLASS,
)
from .scene import Scene

logger = logging.getLogger(__name__)


def cornell_box() -> Scene:
    """Create a Cornell box scene.

    The walls are huge spheres whose surfaces are nearly flat inside the
    box. A matte, a mirror and a glass sphere stand on the floor.
    """
    scene = Scene()

    scene.add_sphere(Point3(0, -100000, 0), 99990, MATTE_WHITE)    # floor
    scene.add_sphere(Point3(0, 100000, 0), 99990, MATTE_WHITE)     # ceiling
    scene.add_sphere(Point3(0, 0, -100000), 99950, MATTE_WHITE)    # back wall
    scene.add_sphere(Point3(-100000, 0, 0), 99990, MATTE_RED)      # left wall
    scene.add_sphere(Point3(100000, 0, 0), 99990, MATTE_GREEN)     # right wall

    scene.add_sphere(Point3(-5.0, -6.0, -24.5), 3.5, MATTE_BLUE)
    scene.add_sphere(Point3(-3.0, -6.5, -36.5), 4.0, MIRROR)
    scene.add_sphere(Point3(4.0, -6.5, -32.0), 4.0, GLASS)

    scene.add_light(PointLight(Point3(-1.0, 8.0, -40.0), 1.0))

    return scene


def single_sphere() -> Scene:
    """One diffuse white sphere lit from above."""
    scene = Scene()
    scene.add_sphere(Point3(0, 0, -5), 1.0, MATTE_WHITE)
    scene.add_light(PointLight(Point3(0, 5, -5), 1.0))
    return scene


SCENES: Dict[str, Callable[[], Scene]] = {
    'cornell': cornell_box,
    'sphere': single_sphere,
}


def get_scene(name: str) -> Scene:
    """Build a built-in scene by name."""
    try:
        builder = SCENES[name]
    except KeyError:
        raise UnknownSceneError(
            f"Unknown scene '{name}', choose from: {', '.join(sorted(SCENES))}"
        ) from None
    logger.debug("Building scene %s", name)
    return builder()
