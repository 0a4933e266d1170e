"""Tests for sphere and plane intersection and the nearest-hit resolver."""

import math

import pytest

from core.ray import Ray
from core.vector import Vector3
from geometry.plane import Plane
from geometry.scene import Scene
from geometry.sphere import Sphere

WHITE = Vector3(255, 255, 255)


class TestSphere:

    def test_front_face_distance(self):
        origin = Vector3(0, 0, 10)
        center = Vector3(0, 0, -150)
        sphere = Sphere(center, 50.0, WHITE)
        hit = sphere.intersect(origin, (center - origin).normalize())
        assert hit is not None
        assert math.isclose(hit.distance, (origin - center).magnitude() - 50.0)
        assert hit.point.is_close(Vector3(0, 0, -100))
        assert hit.normal.is_close(Vector3(0, 0, 1))

    @pytest.mark.parametrize("offset", [Vector3(30, 0, 0), Vector3(-12, 40, 3), Vector3(0, -49, 0)])
    def test_hit_point_is_on_surface(self, offset):
        sphere = Sphere(Vector3(0, 0, -150), 50.0, WHITE)
        origin = Vector3(0, 0, 10)
        direction = (sphere.center + offset - origin).normalize()
        hit = sphere.intersect(origin, direction)
        assert hit is not None
        assert math.isclose((hit.point - sphere.center).magnitude(), 50.0, rel_tol=1e-9)
        assert math.isclose(hit.normal.magnitude(), 1.0, rel_tol=1e-12)

    @pytest.mark.parametrize("direction", [Vector3(0.2, -0.1, -1), Vector3(-0.25, 0.05, -1)])
    def test_distance_is_measured_to_hit_point(self, direction):
        origin = Vector3(3, -2, 10)
        direction = direction.normalize()
        hit = Sphere(Vector3(0, 0, -150), 50.0, WHITE).intersect(origin, direction)
        assert hit is not None
        assert math.isclose(hit.distance, (hit.point - origin).magnitude(), rel_tol=1e-12)
        assert hit.point.is_close(origin + direction * hit.distance, tol=1e-9)

    def test_miss_to_the_side(self):
        sphere = Sphere(Vector3(0, 0, -150), 50.0, WHITE)
        assert sphere.intersect(Vector3(0, 0, 10), Vector3(1, 0, 0)) is None
        assert sphere.intersect(Vector3(0, 0, 10), Vector3(0, 0.6, -0.8)) is None

    def test_sphere_behind_origin(self):
        sphere = Sphere(Vector3(0, 0, -150), 50.0, WHITE)
        assert sphere.intersect(Vector3(0, 0, 10), Vector3(0, 0, 1)) is None

    def test_inside_with_center_ahead_hits_far_side(self):
        sphere = Sphere(Vector3(0, 0, -1), 5.0, WHITE)
        hit = sphere.intersect(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert hit is not None
        assert math.isclose(hit.distance, 6.0)
        assert hit.normal.is_close(Vector3(0, 0, -1))

    def test_inside_with_center_behind_reports_no_hit(self):
        sphere = Sphere(Vector3(0, 0, 1), 5.0, WHITE)
        assert sphere.intersect(Vector3(0, 0, 0), Vector3(0, 0, -1)) is None

    @pytest.mark.parametrize("radius", [0.0, -3.0])
    def test_degenerate_radius_never_hits(self, radius):
        sphere = Sphere(Vector3(0, 0, -10), radius, WHITE)
        assert sphere.is_degenerate()
        assert sphere.intersect(Vector3(0, 0, 0), Vector3(0, 0, -1)) is None

    def test_reflectivity_out_of_range(self):
        with pytest.raises(ValueError):
            Sphere(Vector3(0, 0, 0), 1.0, WHITE, reflectivity=1.5)


class TestPlane:

    def test_hit_from_front(self):
        plane = Plane(Vector3(0, 1, 0), -50.0, WHITE)
        hit = plane.intersect(Vector3(0, 0, 0), Vector3(0, -1, 0))
        assert hit is not None
        assert hit.point.is_close(Vector3(0, -50, 0))
        assert hit.normal == Vector3(0, 1, 0)
        assert math.isclose(hit.distance, 50.0)

    def test_oblique_distance(self):
        plane = Plane(Vector3(0, 1, 0), 0.0, WHITE)
        direction = Vector3(1, -1, 0).normalize()
        hit = plane.intersect(Vector3(0, 10, 0), direction)
        assert hit is not None
        assert math.isclose(hit.distance, 10 * math.sqrt(2), rel_tol=1e-12)

    def test_parallel_ray_misses(self):
        plane = Plane(Vector3(0, 1, 0), -50.0, WHITE)
        assert plane.intersect(Vector3(0, 0, 0), Vector3(1, 0, 0)) is None

    def test_ray_from_behind_misses(self):
        plane = Plane(Vector3(0, 1, 0), -50.0, WHITE)
        assert plane.intersect(Vector3(0, -100, 0), Vector3(0, 1, 0)) is None

    def test_plane_behind_origin_misses(self):
        plane = Plane(Vector3(0, 1, 0), -50.0, WHITE)
        assert plane.intersect(Vector3(0, -60, 0), Vector3(0, -1, 0)) is None

    def test_normal_is_normalized(self):
        plane = Plane(Vector3(0, 5, 0), 2.0, WHITE)
        assert plane.normal == Vector3(0, 1, 0)

    def test_offset_is_measured_along_unit_normal(self):
        plane = Plane(Vector3(0, 4, 0), -50.0, WHITE)
        hit = plane.intersect(Vector3(0, 0, 0), Vector3(0, -1, 0))
        assert hit is not None
        assert hit.point.is_close(Vector3(0, -50, 0))
        assert math.isclose(hit.distance, 50.0)

    def test_zero_normal_never_hits(self):
        plane = Plane(Vector3(0, 0, 0), 2.0, WHITE)
        assert plane.is_degenerate()
        assert plane.intersect(Vector3(0, 0, 0), Vector3(0, -1, 0)) is None


class TestScene:

    def test_nearest_hit_picks_closest(self):
        far = Sphere(Vector3(0, 0, -150), 10.0, Vector3(255, 0, 0))
        near = Sphere(Vector3(0, 0, -50), 10.0, Vector3(0, 255, 0))
        collision = Scene([far, near]).nearest_hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)))
        assert collision.object is near
        assert math.isclose(collision.hit.distance, 40.0)

    def test_ties_go_to_first_object(self):
        first = Sphere(Vector3(0, 0, -50), 10.0, Vector3(255, 0, 0))
        second = Sphere(Vector3(0, 0, -50), 10.0, Vector3(0, 255, 0))
        collision = Scene([first, second]).nearest_hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)))
        assert collision.object is first

    def test_empty_scene(self):
        scene = Scene()
        assert scene.nearest_hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))) is None
        assert not scene.occluded(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)))

    def test_ray_away_from_everything_misses(self):
        from main import EYE, create_scene

        scene = create_scene()
        assert scene.nearest_hit(Ray(EYE, Vector3(0, 0, 1))) is None
        for obj in scene:
            assert obj.intersect(EYE, Vector3(0, 0, 1)) is None

    def test_occluded_ignores_distance(self, floor_plane):
        blocker = Sphere(Vector3(0, 500, 0), 10.0, WHITE)
        scene = Scene([floor_plane, blocker])
        assert scene.occluded(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0)))

    def test_objects_are_immutable_sequence(self, single_sphere_scene):
        assert isinstance(single_sphere_scene.objects, tuple)
        assert len(single_sphere_scene) == 1
