"""Tests for materials, presets and hittable objects."""

import pytest
import dataclasses

from prismtrace.vector import Color, Point3
from prismtrace.shapes import Sphere
from prismtrace.materials import (
    Material, Hittable, PRESETS,
    MATTE_WHITE, MATTE_BLACK, MIRROR, GLASS,
)


class TestMaterial:
    """Test Material construction and validation."""

    def test_defaults(self):
        mat = Material()
        assert mat.color == Color(0, 0, 0)
        assert mat.ambient_const == 0.3
        assert mat.refractive_index == 1.0
        assert mat.reflectivity == 0.0
        assert mat.is_transmissive is False

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            MATTE_WHITE.reflectivity = 0.5

    def test_color_is_read_only(self):
        color = MATTE_WHITE.color
        with pytest.raises(ValueError):
            color *= 2
        with pytest.raises(ValueError):
            color[0] = 1.0
        assert MATTE_WHITE.color == Color(0.8, 0.8, 0.8)

    def test_color_copied_from_argument(self):
        color = Color(0.5, 0.5, 0.5)
        mat = Material(color)
        color *= 2
        assert mat.color == Color(0.5, 0.5, 0.5)

    def test_derived_colors_are_writable(self):
        scaled = MATTE_WHITE.color * 2
        scaled += Color(0.1, 0.1, 0.1)
        assert scaled == Color(1.7, 1.7, 1.7)

    def test_invalid_refractive_index(self):
        with pytest.raises(ValueError):
            Material(Color(1, 1, 1), refractive_index=0.5)

    def test_invalid_reflectivity(self):
        with pytest.raises(ValueError):
            Material(Color(1, 1, 1), reflectivity=1.5)

    def test_invalid_ambient(self):
        with pytest.raises(ValueError):
            Material(Color(1, 1, 1), ambient_const=-0.1)

    def test_transparency(self):
        assert GLASS.transparency == pytest.approx(0.1)
        assert MIRROR.transparency == 0.0
        assert MATTE_WHITE.transparency == 0.0

    def test_is_reflective(self):
        assert MIRROR.is_reflective
        assert not MATTE_WHITE.is_reflective


class TestPresets:
    """Test the material presets."""

    def test_glass(self):
        assert GLASS.refractive_index == 1.52
        assert GLASS.reflectivity == 0.9
        assert GLASS.is_transmissive

    def test_mirror(self):
        assert MIRROR.reflectivity == 0.9
        assert not MIRROR.is_transmissive

    def test_registry(self):
        assert PRESETS['glass'] is GLASS
        assert PRESETS['matte_black'] is MATTE_BLACK
        assert all(name == name.lower() for name in PRESETS)


class TestHittable:
    """Test Hittable."""

    def test_default_material(self):
        obj = Hittable(Sphere(Point3(0, 0, 0), 1.0))
        assert obj.material is MATTE_BLACK

    def test_shared_material(self):
        a = Hittable(Sphere(Point3(0, 0, 0), 1.0), GLASS)
        b = Hittable(Sphere(Point3(5, 0, 0), 2.0), GLASS)
        assert a.material is b.material
