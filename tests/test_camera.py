import math
import sys
import os

import glm
import pytest

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from camera import Camera, Spherical, EPS, basis_from_offset


def test_spherical_from_vector():
    s = Spherical.from_vector((0.0, 50.0, 100.0))
    assert s.radius == pytest.approx(math.sqrt(12500))
    assert s.theta == pytest.approx(0.0)
    assert s.phi == pytest.approx(math.acos(50.0 / math.sqrt(12500)))

    v = s.to_vector()
    assert v.x == pytest.approx(0.0, abs=1e-4)
    assert v.y == pytest.approx(50.0, abs=1e-4)
    assert v.z == pytest.approx(100.0, abs=1e-4)


def test_spherical_azimuth_convention():
    # +X lies a quarter turn from +Z around +Y
    s = Spherical.from_vector((10.0, 0.0, 0.0))
    assert s.theta == pytest.approx(math.pi / 2)
    assert s.phi == pytest.approx(math.pi / 2)


def test_spherical_zero_vector():
    s = Spherical.from_vector((0.0, 0.0, 0.0))
    assert s.radius == 0.0
    assert s.phi == 0.0
    assert s.theta == 0.0


def test_make_safe_keeps_away_from_poles():
    assert Spherical(1.0, 0.0, 0.0).make_safe().phi == EPS
    assert Spherical(1.0, math.pi, 0.0).make_safe().phi == pytest.approx(math.pi - EPS)
    assert Spherical(1.0, 1.0, 0.0).make_safe().phi == 1.0


def test_copy_is_independent():
    a = Spherical(5.0, 1.0, 2.0)
    b = a.copy()
    b.radius = 7.0
    assert a.radius == 5.0


def test_basis_matches_look_at():
    camera = Camera(position=(30.0, 40.0, 50.0))
    camera.look_at((0.0, 0.0, 0.0))
    right, up, forward = camera.get_basis()

    r2, u2 = basis_from_offset(camera.position - camera.target)
    assert glm.distance(right, r2) < 1e-4
    assert glm.distance(up, u2) < 1e-4
    assert glm.dot(forward, glm.normalize(camera.target - camera.position)) == pytest.approx(1.0, abs=1e-5)


def test_picking_ray_through_center_hits_target():
    camera = Camera(position=(0.0, 50.0, 100.0))
    camera.look_at((0.0, 0.0, 0.0))
    origin, direction = camera.get_picking_ray(0.0, 0.0)
    expected = glm.normalize(-camera.position)
    assert glm.distance(origin, camera.position) < 1e-6
    assert glm.dot(direction, expected) == pytest.approx(1.0, abs=1e-5)


def test_aspect_from_size():
    camera = Camera()
    camera.set_aspect(1600, 900)
    assert camera.aspect == pytest.approx(16 / 9)
    camera.set_aspect(100, 0)
    assert camera.aspect == pytest.approx(16 / 9)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
