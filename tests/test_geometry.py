import sys
import os
import numpy as np
import pytest

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import geometry
from celestial_data import ASTEROID_BELT


def test_sphere_layout():
    mesh = geometry.create_sphere(2.5, 32, 16)
    assert mesh.vertices.shape == (33 * 17, 3)
    assert mesh.normals.shape == mesh.vertices.shape
    assert mesh.uvs.shape == (33 * 17, 2)
    # Pole rows contribute one triangle per column
    assert mesh.triangle_count == 32 * (2 * 16 - 2)
    assert mesh.indices.max() < mesh.vertex_count

    radii = np.linalg.norm(mesh.vertices, axis=1)
    assert np.allclose(radii, 2.5, atol=1e-5)
    assert np.allclose(np.linalg.norm(mesh.normals, axis=1), 1.0, atol=1e-5)
    assert mesh.vertices[:, 1].max() == pytest.approx(2.5)
    assert mesh.vertices[:, 1].min() == pytest.approx(-2.5)


def test_ring_lies_flat_between_radii():
    mesh = geometry.create_ring(3.6, 6.6, 64)
    assert mesh.vertex_count == 2 * 65
    assert mesh.triangle_count == 2 * 64
    assert np.allclose(mesh.vertices[:, 1], 0.0)

    radii = np.linalg.norm(mesh.vertices[:, [0, 2]], axis=1)
    assert radii.min() == pytest.approx(3.6, abs=1e-5)
    assert radii.max() == pytest.approx(6.6, abs=1e-5)
    assert np.allclose(mesh.normals, [0.0, 1.0, 0.0])


def test_orbit_path_is_closed_circle():
    points = geometry.create_orbit_path(42, segments=128)
    assert points.shape == (129, 3)
    assert np.allclose(points[0], points[-1], atol=1e-4)
    assert np.allclose(np.linalg.norm(points, axis=1), 42.0, atol=1e-4)
    assert np.allclose(points[:, 1], 0.0)


def test_star_field_bounds():
    stars = geometry.create_star_field(count=500, spread=2000.0, rng=np.random.default_rng(0))
    assert stars.shape == (500, 3)
    assert stars.dtype == np.float32
    assert np.all(np.abs(stars) <= 1000.0)


def test_star_style_small_screens():
    assert geometry.star_style(600) == (1.2, 1.0)
    assert geometry.star_style(1600) == (0.5, 0.8)


def test_asteroid_positions_in_belt():
    positions = geometry.create_asteroid_positions(ASTEROID_BELT, rng=np.random.default_rng(7))
    assert positions.shape == (ASTEROID_BELT["particle_count"], 3)
    radial = np.linalg.norm(positions[:, [0, 2]], axis=1)
    assert radial.min() >= ASTEROID_BELT["inner_radius"] - 1e-3
    assert radial.max() <= ASTEROID_BELT["outer_radius"] + 1e-3
    assert np.all(np.abs(positions[:, 1]) <= 1.0)


def test_merge_instances():
    base = geometry.create_sphere(0.05, 8, 8)
    offsets = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [0.0, 0.0, -5.0]], dtype=np.float32)
    merged = geometry.merge_instances(base, offsets)

    assert merged.vertex_count == 3 * base.vertex_count
    assert merged.triangle_count == 3 * base.triangle_count
    assert merged.indices.max() == 3 * base.vertex_count - 1

    second = merged.vertices[base.vertex_count:2 * base.vertex_count]
    assert np.allclose(second.mean(axis=0), [10.0, 0.0, 0.0], atol=0.05)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
