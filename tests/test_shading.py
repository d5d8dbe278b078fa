"""Tests for Lambertian shading, Schlick reflectance and refraction."""

import pytest
import math

from prismtrace.vector import Vec3, Point3, Color
from prismtrace.ray import Ray
from prismtrace.lights import PointLight
from prismtrace.materials import Material, Hittable, MATTE_WHITE, GLASS
from prismtrace.scene import Scene, Hit
from prismtrace.shapes import Sphere, IntersectionContext
from prismtrace.shading import (
    lambertian, schlick_approximation, refract, SHADOW_BIAS,
)


def make_hit(point, normal, material=MATTE_WHITE, center=Point3(0, 0, -5), radius=1.0):
    obj = Hittable(Sphere(center, radius), material)
    return Hit(obj, IntersectionContext(t=1.0, intersection_point=point, normal=normal))


def assert_color_close(actual, expected, tol=1e-9):
    for a, e in zip(actual, expected):
        assert abs(a - e) < tol, f"{actual} != {expected}"


class TestLambertian:
    """Test lambertian()."""

    @pytest.fixture
    def lit_sphere(self):
        scene = Scene()
        scene.add_sphere(Point3(0, 0, -5), 1.0, MATTE_WHITE)
        scene.add_light(PointLight(Point3(0, 5, -5), 1.0))
        return scene

    def test_miss_is_black(self, lit_sphere):
        assert lambertian(None, lit_sphere) == Color(0, 0, 0)

    def test_fully_lit(self, lit_sphere):
        # Top of the sphere, light straight above
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        color = lambertian(hit, lit_sphere)
        expected = (0.25 + 1.0) * MATTE_WHITE.color
        assert_color_close(color, expected)

    def test_facing_away_gets_ambient(self, lit_sphere):
        hit = make_hit(Point3(0, -1, -5), Vec3(0, -1, 0))
        color = lambertian(hit, lit_sphere)
        assert_color_close(color, 0.25 * MATTE_WHITE.color)

    def test_occluded_gets_ambient(self, lit_sphere):
        lit_sphere.add_sphere(Point3(0, 3, -5), 0.5, MATTE_WHITE)
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        color = lambertian(hit, lit_sphere)
        assert_color_close(color, 0.25 * MATTE_WHITE.color)

    def test_lights_are_averaged(self, lit_sphere):
        # A second light below the surface contributes nothing but still counts
        lit_sphere.add_light(PointLight(Point3(0, -5, -5), 1.0))
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        color = lambertian(hit, lit_sphere)
        assert_color_close(color, (0.25 + 0.5) * MATTE_WHITE.color)

    def test_intensity_scales(self):
        scene = Scene()
        scene.add_light(PointLight(Point3(0, 5, -5), 0.4))
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        assert_color_close(lambertian(hit, scene), (0.25 + 0.4) * MATTE_WHITE.color)

    def test_oblique_light(self):
        scene = Scene()
        scene.add_light(PointLight(Point3(10, 11, -5), 1.0))
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        expected = (0.25 + math.cos(math.pi / 4)) * MATTE_WHITE.color
        assert_color_close(lambertian(hit, scene), expected)

    def test_no_lights_gives_ambient(self):
        hit = make_hit(Point3(0, 1, -5), Vec3(0, 1, 0))
        assert_color_close(lambertian(hit, Scene()), 0.25 * MATTE_WHITE.color)


class TestSchlick:
    """Test schlick_approximation()."""

    @staticmethod
    def incoming_for(cos_x):
        # Normal is +Z; incoming (sin, 0, -cos) makes -(n . d) == cos_x
        return Vec3(math.sqrt(max(0.0, 1.0 - cos_x * cos_x)), 0.0, -cos_x)

    def test_normal_incidence_equals_r0(self):
        mat = Material(Color(1, 1, 1), refractive_index=1.5)
        r0 = (1.0 - 1.5) / (1.0 + 1.5)
        r0 *= r0
        value = schlick_approximation(Vec3(0, 0, -1), Vec3(0, 0, 1), mat)
        assert value == r0

    @pytest.mark.parametrize("n", [1.0, 1.33, 1.52, 2.4])
    @pytest.mark.parametrize("cos_x", [-1.0, -0.7, -0.2, 0.0, 0.3, 0.8, 1.0])
    def test_in_unit_range(self, n, cos_x):
        mat = Material(Color(1, 1, 1), refractive_index=n)
        value = schlick_approximation(self.incoming_for(cos_x), Vec3(0, 0, 1), mat)
        assert 0.0 <= value <= 1.0

    def test_total_internal_reflection(self):
        mat = Material(Color(1, 1, 1), refractive_index=1.5)
        value = schlick_approximation(self.incoming_for(0.5), Vec3(0, 0, 1), mat)
        assert value == 1.0

    def test_vacuum_grazing(self):
        mat = Material(Color(1, 1, 1), refractive_index=1.0)
        value = schlick_approximation(self.incoming_for(0.0), Vec3(0, 0, 1), mat)
        assert value == pytest.approx(1.0)


class TestRefract:
    """Test refract()."""

    @staticmethod
    def context(normal=Vec3(0, 0, 1)):
        return IntersectionContext(t=1.0, intersection_point=Point3(0, 0, 0), normal=normal)

    def test_equal_indices_no_bending(self):
        mat = Material(Color(1, 1, 1), refractive_index=1.0, is_transmissive=True)
        ray = Ray(Point3(-0.6, 0, 0.8), Vec3(0.6, 0, -0.8))
        out = refract(ray, mat, self.context())

        assert out is not None
        assert out.direction == ray.direction

    def test_origin_offset_along_direction(self):
        mat = Material(Color(1, 1, 1), refractive_index=1.0, is_transmissive=True)
        ray = Ray(Point3(0, 0, 1), Vec3(0, 0, -1))
        out = refract(ray, mat, self.context())
        assert out.origin == Point3(0, 0, -SHADOW_BIAS)

    def test_straight_through(self):
        out = refract(Ray(Point3(0, 0, 1), Vec3(0, 0, -1)), GLASS, self.context())
        assert out.direction == Vec3(0, 0, -1)

    def test_bends_toward_normal_entering(self):
        ray = Ray(Point3(0, 0, 1), Vec3(0.6, 0, -0.8))
        out = refract(ray, Material(Color(1, 1, 1), refractive_index=1.5), self.context())

        assert out is not None
        assert 0 < out.direction.x < 0.6
        assert out.direction.z < 0
        assert abs(out.direction.length() - 1.0) < 1e-9
        # Snell: sin(theta_t) = sin(theta_i) / n
        assert abs(out.direction.x - 0.4) < 1e-9

    def test_bends_away_from_normal_exiting(self):
        # Ray inside the material travelling along the outward normal
        ray = Ray(Point3(0, 0, -1), Vec3(0.3, 0, math.sqrt(1 - 0.09)))
        out = refract(ray, Material(Color(1, 1, 1), refractive_index=1.5), self.context())

        assert out is not None
        assert abs(out.direction.x - 0.45) < 1e-9
        assert out.direction.z > 0

    def test_total_internal_reflection(self):
        ray = Ray(Point3(0, 0, -1), Vec3(0.9, 0, math.sqrt(1 - 0.81)))
        out = refract(ray, Material(Color(1, 1, 1), refractive_index=1.5), self.context())
        assert out is None
