import math
import sys
import os

import glm
import numpy as np
import pytest

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from camera import Camera
from controls import BasicControls
from solar_system import SolarSystem, ray_sphere_distance, HOME_POSITION, MAX_SPEED
from celestial_data import CELESTIAL_DATA, hex_to_rgb


@pytest.fixture
def scene():
    return SolarSystem(rng=np.random.default_rng(42))


def park_planets(scene, angle=0.0):
    for planet in scene.planets.values():
        planet.angle = angle
        planet.spin = 0.0


def test_scene_contents(scene):
    assert list(scene.planets) == ["mercury", "venus", "earth", "mars",
                                   "jupiter", "saturn", "uranus", "neptune"]
    assert list(scene.moons) == ["earth_luna"]
    assert len(scene.orbital_paths) == 8
    assert scene.star_positions.shape == (10000, 3)
    assert scene.asteroid_positions.shape == (2000, 3)
    for planet in scene.planets.values():
        assert 0.0 <= planet.angle < 2.0 * math.pi


def test_seeded_layout_is_reproducible():
    a = SolarSystem(rng=np.random.default_rng(3))
    b = SolarSystem(rng=np.random.default_rng(3))
    assert a.planets["mars"].angle == b.planets["mars"].angle
    assert np.array_equal(a.star_positions, b.star_positions)


def test_advance_one_frame(scene):
    park_planets(scene)
    scene.advance()

    assert scene.time == pytest.approx(0.01)
    assert scene.sun_rotation == pytest.approx(0.005)
    # Inner planets orbit at 30% of the boosted rate
    assert scene.planets["earth"].angle == pytest.approx(1.0 * 0.01 * 100 * 0.3)
    assert scene.planets["jupiter"].angle == pytest.approx((365.25 / 4333) * 0.01 * 100)
    assert scene.planets["earth"].spin == pytest.approx(0.1)
    # Retrograde rotation spins backwards
    assert scene.planets["venus"].spin < 0.0
    assert scene.moons["earth_luna"].angle == pytest.approx(0.05)
    assert scene.asteroid_rotation == pytest.approx(0.001)
    assert scene.star_rotation == pytest.approx(0.0001)


def test_advance_scales_with_speed(scene):
    park_planets(scene)
    scene.set_animation_speed(2.0)
    scene.advance()
    assert scene.planets["earth"].angle == pytest.approx(0.6)


def test_paused_scene_does_not_move(scene):
    before = scene.planets["mars"].angle
    scene.paused = True
    scene.advance()
    assert scene.planets["mars"].angle == before
    assert scene.time == 0.0


def test_speed_clamp_and_label(scene):
    assert scene.set_animation_speed(12) == MAX_SPEED
    assert scene.speed_label() == "5x"
    assert scene.set_animation_speed(-1) == 0.0
    assert scene.set_animation_speed(1.5) == 1.5
    assert scene.speed_label() == "1.5x"


def test_toggle_orbits(scene):
    assert scene.show_orbits
    assert scene.toggle_orbits() is False
    assert scene.toggle_orbits() is True
    assert not SolarSystem(rng=np.random.default_rng(0), show_orbits=False).show_orbits


def test_planet_position_follows_angle(scene):
    park_planets(scene)
    pos = scene.planet_position("mars")
    assert glm.distance(pos, glm.vec3(55.0, 0.0, 0.0)) < 1e-4

    scene.planets["mars"].angle = math.pi / 2
    pos = scene.planet_position("mars")
    assert glm.distance(pos, glm.vec3(0.0, 0.0, -55.0)) < 1e-4


def test_moon_orbits_its_planet(scene):
    for _ in range(37):
        scene.advance()
    distance = glm.distance(scene.moon_position("earth_luna"), scene.planet_position("earth"))
    assert distance == pytest.approx(3.0, abs=1e-3)


def test_ray_sphere_distance():
    origin = glm.vec3(0.0, 0.0, 10.0)
    down_z = glm.vec3(0.0, 0.0, -1.0)
    assert ray_sphere_distance(origin, down_z, glm.vec3(0.0), 2.0) == pytest.approx(8.0)
    assert ray_sphere_distance(origin, -down_z, glm.vec3(0.0), 2.0) is None
    assert ray_sphere_distance(origin, glm.vec3(1.0, 0.0, 0.0), glm.vec3(0.0), 2.0) is None
    # Starting inside counts as an immediate hit
    assert ray_sphere_distance(glm.vec3(0.5, 0.0, 0.0), down_z, glm.vec3(0.0), 2.0) == 0.0


def test_pick_planet_from_above(scene):
    park_planets(scene)
    hit = scene.pick((80.0, 50.0, 0.0), (0.0, -1.0, 0.0))
    assert hit is not None
    assert hit.key == "jupiter"
    assert hit.kind == "planet"
    assert hit.distance == pytest.approx(46.5, abs=1e-4)


def test_pick_returns_nearest_body(scene):
    park_planets(scene)
    # Looking along -X from beyond Neptune passes through every planet
    hit = scene.pick((500.0, 0.0, 0.0), (-1.0, 0.0, 0.0))
    assert hit.key == "neptune"


def test_select_at_center_hits_sun(scene):
    camera = Camera(position=HOME_POSITION)
    data = scene.select_at(camera, 0.0, 0.0)
    assert data is CELESTIAL_DATA["sun"]
    assert scene.selected.kind == "sun"
    assert scene.selected.distance == pytest.approx(math.sqrt(12500) - 5.0, abs=1e-3)


def test_select_miss_clears_selection(scene):
    camera = Camera(position=HOME_POSITION)
    scene.select_at(camera, 0.0, 0.0)
    assert scene.select_at(camera, 1.0, 1.0) is None
    assert scene.selected is None


def test_reset_camera_with_controls(scene):
    camera = Camera(position=HOME_POSITION)
    controls = BasicControls(camera)
    controls.rotate_by(200, 80)
    controls.dolly_out()
    controls.pan_by(30, 10)
    for _ in range(20):
        controls.update()
    assert glm.distance(camera.position, glm.vec3(HOME_POSITION)) > 1.0

    scene.reset_camera(camera, controls)
    assert glm.distance(camera.position, glm.vec3(HOME_POSITION)) < 1e-3
    assert glm.distance(controls.target, glm.vec3(0.0)) < 1e-6

    # Later frames keep the home view
    for _ in range(10):
        controls.update()
    assert glm.distance(camera.position, glm.vec3(HOME_POSITION)) < 1e-3


def test_reset_camera_without_controls(scene):
    camera = Camera(position=(5.0, 5.0, 5.0))
    camera.look_at((1.0, 1.0, 1.0))
    scene.reset_camera(camera)
    assert glm.distance(camera.position, glm.vec3(HOME_POSITION)) < 1e-6
    assert glm.distance(camera.target, glm.vec3(0.0)) < 1e-6


def test_hex_to_rgb():
    assert hex_to_rgb(0xFF8000) == pytest.approx((1.0, 128 / 255, 0.0))
    assert hex_to_rgb(0x000000) == (0.0, 0.0, 0.0)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
