"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library (presets or explicit values)
- Spheres
- Point lights

Example scene file:
```yaml
camera:
  center: [0, 0, 0]
  focal_length: 2.0
  aspect_ratio: 1.7778
  image_width: 480

render:
  max_depth: 10
  threads: 0

materials:
  floor:
    preset: matte_white
  tinted_glass:
    color: [0.9, 1.0, 0.9]
    ambient: 0.25
    refractive_index: 1.5
    reflectivity: 0.5
    transmissive: true

objects:
  - center: [0, -100000, 0]
    radius: 99990
    material: floor
  - center: [4, -6.5, -32]
    radius: 4
    material: glass          # presets can be used by name

lights:
  - position: [-1, 8, -40]
    intensity: 1.0
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .vector import Vec3, Color
from .errors import SceneParseError
from .lights import PointLight
from .materials import Material, Hittable, PRESETS, MATTE_BLACK
from .renderer import RenderSettings
from .scene import Scene
from .shapes import Sphere

logger = logging.getLogger(__name__)


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = dict(PRESETS)
        self.scene = Scene()
        self.settings_kwargs: Dict[str, Any] = {}

    def parse_file(self, filepath: str) -> Tuple[Scene, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()
        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise SceneParseError(f"Cannot read {filepath}: {exc}") from exc

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene description must be a mapping, got {type(data).__name__}")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])

        if 'camera' in data:
            self._parse_camera(data['camera'])

        if 'render' in data:
            self._parse_settings(data['render'])

        try:
            settings = RenderSettings(**self.settings_kwargs)
        except ValueError as exc:
            raise SceneParseError(f"Invalid render settings: {exc}") from exc

        logger.info(
            "Parsed scene with %d objects and %d lights",
            len(self.scene.objects), len(self.scene.lights)
        )
        return self.scene, settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Vec3(
                float(data.get('x', 0)),
                float(data.get('y', 0)),
                float(data.get('z', 0))
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Color(
                float(data.get('r', 0)),
                float(data.get('g', 0)),
                float(data.get('b', 0))
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    r = int(hex_color[0:2], 16) / 255.0
                    g = int(hex_color[2:4], 16) / 255.0
                    b = int(hex_color[4:6], 16) / 255.0
                    return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _build_material(self, name: str, mat_data: Dict[str, Any]) -> Material:
        if 'preset' in mat_data:
            preset = str(mat_data['preset']).lower()
            if preset not in PRESETS:
                raise SceneParseError(f"Unknown material preset: {preset}")
            return PRESETS[preset]

        try:
            return Material(
                color=self._parse_color(mat_data.get('color', [0.0, 0.0, 0.0])),
                ambient_const=float(mat_data.get('ambient', 0.3)),
                refractive_index=float(mat_data.get('refractive_index', 1.0)),
                reflectivity=float(mat_data.get('reflectivity', 0.0)),
                is_transmissive=bool(mat_data.get('transmissive', False))
            )
        except ValueError as exc:
            raise SceneParseError(f"Invalid material '{name}': {exc}") from exc

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of names to definitions")
        for name, mat_data in materials_data.items():
            if not isinstance(mat_data, dict):
                raise SceneParseError(f"Material '{name}' must be a mapping")
            self.materials[name] = self._build_material(name, mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return MATTE_BLACK
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material('<inline>', mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _entries(self, section: str, data: Any) -> List[Dict[str, Any]]:
        """Check that a section is a list of mappings."""
        if not isinstance(data, list):
            raise SceneParseError(f"'{section}' must be a list")
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise SceneParseError(f"Entry {index} of '{section}' must be a mapping")
        return data

    def _kind(self, entry: Dict[str, Any], default: str) -> str:
        kind = entry.get('type', default)
        if not isinstance(kind, str):
            raise SceneParseError(f"Invalid type: {kind!r}")
        return kind.lower()

    def _parse_objects(self, objects_data: Any) -> None:
        """Parse objects section."""
        for obj_data in self._entries('objects', objects_data):
            obj_type = self._kind(obj_data, 'sphere')
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = float(obj_data.get('radius', 1.0))
            if radius <= 0:
                raise SceneParseError(f"Sphere radius must be positive, got {radius}")
            self.scene.add_object(Hittable(Sphere(center, radius), material))

    def _parse_lights(self, lights_data: Any) -> None:
        """Parse lights section."""
        for light_data in self._entries('lights', lights_data):
            light_type = self._kind(light_data, 'point')
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            position = self._parse_vec3(light_data.get('position', [0, 5, 0]))
            intensity = float(light_data.get('intensity', 1.0))
            self.scene.add_light(PointLight(position, intensity))

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        if not isinstance(camera_data, dict):
            raise SceneParseError("'camera' must be a mapping")
        if 'center' in camera_data:
            self.settings_kwargs['camera_center'] = self._parse_vec3(camera_data['center'])
        if 'focal_length' in camera_data:
            self.settings_kwargs['focal_length'] = float(camera_data['focal_length'])
        if 'aspect_ratio' in camera_data:
            self.settings_kwargs['aspect_ratio'] = float(camera_data['aspect_ratio'])
        if 'image_width' in camera_data:
            self.settings_kwargs['image_width'] = int(camera_data['image_width'])

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError("'render' must be a mapping")
        if 'max_depth' in settings_data:
            self.settings_kwargs['max_depth'] = int(settings_data['max_depth'])
        if 'threads' in settings_data:
            self.settings_kwargs['num_threads'] = int(settings_data['threads'])
        if 'gamma' in settings_data:
            self.settings_kwargs['gamma'] = float(settings_data['gamma'])


def load_scene(filepath: str) -> Tuple[Scene, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
    """Convenience function to parse a scene from a dictionary."""
    parser = SceneParser()
    return parser.parse_dict(data)
