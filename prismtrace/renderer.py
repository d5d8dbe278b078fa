"""
Renderer module - drives the per-pixel loop.

Implements:
- One primary ray per pixel, traced with ray_color()
- Multi-threaded row-based rendering
- Conversion to 8-bit and image output
"""

from __future__ import annotations
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple
import numpy as np

from .vector import Point3
from .camera import Camera
from .scene import Scene
from .tracer import ray_color

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    image_width: int = 960
    aspect_ratio: float = 16.0 / 9.0
    focal_length: float = 2.0
    camera_center: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    max_depth: int = 10
    num_threads: int = 0  # 0 = auto-detect
    gamma: float = 1.0

    def __post_init__(self):
        if self.image_width < 1:
            raise ValueError(f"image_width must be >= 1, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.focal_length <= 0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    def camera(self) -> Camera:
        """Build the camera these settings describe."""
        return Camera(
            center=self.camera_center,
            focal_length=self.focal_length,
            aspect_ratio=self.aspect_ratio,
            image_width=self.image_width
        )


class Renderer:
    """Whitted-style ray tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Optional[Camera] = None) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        The scene is frozen before tracing starts.

        Args:
            scene: The scene to render
            camera: The camera to render from (built from settings if None)

        Returns:
            Float image of shape (height, width, 3)
        """
        camera = camera if camera is not None else self.settings.camera()
        width = camera.image_width
        height = camera.image_height
        max_depth = self.settings.max_depth

        scene.freeze()
        logger.info(
            "Rendering %dx%d, %d objects, %d lights, depth %d, %d threads",
            width, height, len(scene.objects), len(scene.lights),
            max_depth, self.settings.num_threads
        )
        start = time.perf_counter()

        image = np.zeros((height, width, 3), dtype=np.float64)

        def render_row(v: int) -> Tuple[int, np.ndarray]:
            """Render a single image row."""
            row = np.zeros((width, 3), dtype=np.float64)
            for u in range(width):
                ray = camera.get_ray(v, u)
                row[u] = ray_color(ray, max_depth, scene).to_array()
            return v, row

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                rows = executor.map(render_row, range(height))
                self._collect(rows, image, height)
        else:
            self._collect((render_row(v) for v in range(height)), image, height)

        logger.info("Render finished in %.2f s", time.perf_counter() - start)
        return image

    def _collect(self, rows, image: np.ndarray, height: int) -> None:
        for completed, (v, row) in enumerate(rows, start=1):
            image[v] = row
            if self._progress_callback:
                self._progress_callback(completed / height)

    def to_ldr(self, image: np.ndarray) -> np.ndarray:
        """Convert a float image to 8-bit.

        Channels are clipped to [0, 1], scaled by 255 and truncated.
        """
        clipped = np.clip(image, 0.0, 1.0)
        if self.settings.gamma != 1.0:
            clipped = np.power(clipped, 1.0 / self.settings.gamma)
        return (clipped * 255).astype(np.uint8)

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Float or 8-bit image array
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)

        PILImage.fromarray(image).save(filename)
        logger.info("Saved %s", filename)
