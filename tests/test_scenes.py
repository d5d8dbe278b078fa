"""Tests for the built-in scenes."""

import pytest

from prismtrace.vector import Point3
from prismtrace.errors import UnknownSceneError
from prismtrace.materials import GLASS, MIRROR, MATTE_BLUE
from prismtrace.renderer import Renderer, RenderSettings
from prismtrace.scene import Scene
from prismtrace.scenes import SCENES, cornell_box, get_scene


class TestCornellBox:
    """Test the Cornell box scene."""

    def test_contents(self):
        scene = cornell_box()
        assert len(scene.objects) == 8
        assert len(scene.lights) == 1
        assert scene.lights[0].position == Point3(-1, 8, -40)

    def test_feature_spheres(self):
        materials = [obj.material for obj in cornell_box().objects[5:]]
        assert materials == [MATTE_BLUE, MIRROR, GLASS]

    def test_fresh_instance(self):
        assert cornell_box() is not cornell_box()

    def test_small_render(self):
        settings = RenderSettings(image_width=16, max_depth=4, num_threads=1)
        image = Renderer(settings).render(cornell_box())

        assert image.shape == (9, 16, 3)
        # The camera sits inside the box; only mirror rays escaping through
        # the open front come back black
        assert (image.sum(axis=2) > 0).mean() > 0.9
        assert image.min() >= 0.0
        assert image.max() <= 1.0


class TestRegistry:
    """Test scene lookup."""

    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_builds(self, name):
        assert isinstance(get_scene(name), Scene)

    def test_unknown(self):
        with pytest.raises(UnknownSceneError, match="cornell"):
            get_scene("kitchen")
