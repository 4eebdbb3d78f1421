import logging
import math
from dataclasses import dataclass
from typing import Optional

import glm
import numpy as np

import geometry
from celestial_data import (CELESTIAL_DATA, ASTEROID_BELT, SCALE_FACTORS,
                            INNER_PLANETS, INNER_PLANET_SPEED)

logger = logging.getLogger(__name__)

HOME_POSITION = (0.0, 50.0, 100.0)
HOME_TARGET = (0.0, 0.0, 0.0)

MIN_SPEED = 0.0
MAX_SPEED = 5.0

Y_AXIS = glm.vec3(0.0, 1.0, 0.0)


@dataclass
class PlanetState:
    key: str
    data: dict
    angle: float = 0.0  # orbital angle around the sun
    spin: float = 0.0   # rotation around the planet's own axis


@dataclass
class MoonState:
    key: str
    planet_key: str
    data: dict
    angle: float = 0.0


@dataclass
class PickResult:
    key: str
    kind: str  # "sun", "planet" or "moon"
    data: dict
    distance: float


def rotation_y(angle):
    return glm.rotate(glm.mat4(1.0), angle, Y_AXIS)


def ray_sphere_distance(origin, direction, center, radius):
    """
    Distance along a normalized ray to the first intersection with a sphere,
    or None if the ray misses it. A ray starting inside the sphere hits at 0.
    """
    oc = origin - center
    b = glm.dot(oc, direction)
    c = glm.dot(oc, oc) - radius * radius
    disc = b * b - c
    if disc < 0.0:
        return None
    root = math.sqrt(disc)
    t = -b - root
    if t < 0.0:
        t = -b + root
        if t < 0.0:
            return None
        return 0.0
    return t


class SolarSystem:
    """
    Scene state for the visualization: body orbits and spins, the star field,
    the asteroid belt, orbit paths, selection and display toggles.
    """

    def __init__(self, rng=None, animation_speed=1.0, show_orbits=True):
        self.rng = rng if rng is not None else np.random.default_rng()

        self.animation_speed = 1.0
        self.set_animation_speed(animation_speed)
        self.time = 0.0
        self.paused = False
        self.show_orbits = show_orbits

        self.sun_data = CELESTIAL_DATA["sun"]
        self.sun_rotation = 0.0
        self.planets = {}
        self.moons = {}
        self.orbital_paths = {}
        self.asteroid_positions = None
        self.asteroid_rotation = 0.0
        self.star_positions = None
        self.star_rotation = 0.0

        self.selected: Optional[PickResult] = None

        logger.info("Creating star field...")
        self.create_star_field()
        logger.info("Creating planets...")
        self.create_planets()
        logger.info("Creating asteroid belt...")
        self.create_asteroid_belt()
        logger.info(f"Scene ready: {len(self.planets)} planets, {len(self.moons)} moons")

    def create_star_field(self):
        self.star_positions = geometry.create_star_field(rng=self.rng)

    def create_planets(self):
        for key, data in CELESTIAL_DATA["planets"].items():
            self.planets[key] = PlanetState(key, data, angle=float(self.rng.random() * 2.0 * math.pi))
            self.orbital_paths[key] = geometry.create_orbit_path(data["display_distance"])
            for moon_key, moon_data in data.get("moons", {}).items():
                full_key = f"{key}_{moon_key}"
                self.moons[full_key] = MoonState(full_key, key, moon_data)

    def create_asteroid_belt(self):
        self.asteroid_positions = geometry.create_asteroid_positions(ASTEROID_BELT, rng=self.rng)

    def set_animation_speed(self, value):
        self.animation_speed = max(MIN_SPEED, min(MAX_SPEED, float(value)))
        return self.animation_speed

    def speed_label(self):
        return f"{self.animation_speed:g}x"

    def toggle_orbits(self):
        self.show_orbits = not self.show_orbits
        return self.show_orbits

    @staticmethod
    def orbital_speed(key, data):
        multiplier = SCALE_FACTORS["speed"]
        if key in INNER_PLANETS:
            multiplier *= INNER_PLANET_SPEED
        return (365.25 / data["orbital_period"]) * 0.01 * multiplier

    def advance(self):
        """Advance the animation by one frame."""
        if self.paused:
            return
        speed = self.animation_speed

        self.time += 0.01 * speed
        self.sun_rotation += 0.005 * speed

        for key, planet in self.planets.items():
            planet.angle += self.orbital_speed(key, planet.data) * speed
            planet.spin += (1.0 / planet.data["rotation_period"]) * 0.1 * speed

        for moon in self.moons.values():
            moon.angle += (27.3 / moon.data["orbital_period"]) * 0.05 * speed

        self.asteroid_rotation += 0.001 * speed
        self.star_rotation += 0.0001 * speed

    # World transforms
    def sun_matrix(self):
        return rotation_y(self.sun_rotation)

    def planet_position(self, key):
        planet = self.planets[key]
        return glm.vec3(rotation_y(planet.angle) * glm.vec4(planet.data["display_distance"], 0.0, 0.0, 1.0))

    def planet_matrix(self, key):
        planet = self.planets[key]
        m = rotation_y(planet.angle)
        m = glm.translate(m, glm.vec3(planet.data["display_distance"], 0.0, 0.0))
        return glm.rotate(m, planet.spin, Y_AXIS)

    def moon_position(self, key):
        return glm.vec3(self.moon_matrix(key) * glm.vec4(0.0, 0.0, 0.0, 1.0))

    def moon_matrix(self, key):
        # Moons ride in the spinning frame of their planet
        moon = self.moons[key]
        m = self.planet_matrix(moon.planet_key)
        m = glm.rotate(m, moon.angle, Y_AXIS)
        return glm.translate(m, glm.vec3(moon.data["display_distance"], 0.0, 0.0))

    def asteroid_matrix(self):
        return rotation_y(self.asteroid_rotation)

    def star_matrix(self):
        return rotation_y(self.star_rotation)

    def clickable_bodies(self):
        """Yields (key, kind, data, center, radius) for every pickable body."""
        yield "sun", "sun", self.sun_data, glm.vec3(0.0), self.sun_data["display_radius"]
        for key, planet in self.planets.items():
            yield key, "planet", planet.data, self.planet_position(key), planet.data["display_radius"]
        for key, moon in self.moons.items():
            yield key, "moon", moon.data, self.moon_position(key), moon.data["display_radius"]

    # Picking and selection
    def pick(self, origin, direction) -> Optional[PickResult]:
        origin = glm.vec3(origin)
        direction = glm.normalize(glm.vec3(direction))
        best = None
        for key, kind, data, center, radius in self.clickable_bodies():
            t = ray_sphere_distance(origin, direction, center, radius)
            if t is None:
                continue
            if best is None or t < best.distance:
                best = PickResult(key, kind, data, t)
        return best

    def select_at(self, camera, ndc_x, ndc_y):
        """
        Selects the body under the given viewport point. Returns its data
        dict, or None after clearing the selection on a miss.
        """
        origin, direction = camera.get_picking_ray(ndc_x, ndc_y)
        hit = self.pick(origin, direction)
        if hit is None:
            self.clear_selection()
            return None
        self.selected = hit
        logger.info(f"Selected {hit.kind} '{hit.data['name']}'")
        return hit.data

    def clear_selection(self):
        self.selected = None

    def reset_camera(self, camera, controls=None):
        camera.position = glm.vec3(HOME_POSITION)
        if controls is not None:
            controls.reset(position=HOME_POSITION, target=HOME_TARGET)
            controls.update()
        else:
            camera.look_at(HOME_TARGET)
