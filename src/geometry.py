import math
from dataclasses import dataclass
import numpy as np


@dataclass
class MeshData:
    vertices: np.ndarray  # (N, 3) float32
    normals: np.ndarray   # (N, 3) float32
    uvs: np.ndarray       # (N, 2) float32
    indices: np.ndarray   # (M,) uint32, triangles

    @property
    def vertex_count(self):
        return self.vertices.shape[0]

    @property
    def triangle_count(self):
        return self.indices.shape[0] // 3


def create_sphere(radius: float, width_segments: int = 32, height_segments: int = 16) -> MeshData:
    """
    UV sphere laid out like three.js SphereGeometry: rows run from the north
    pole (+Y) to the south pole, columns sweep phi from -X around the Y axis.
    """
    u = np.linspace(0.0, 1.0, width_segments + 1)
    v = np.linspace(0.0, 1.0, height_segments + 1)
    uu, vv = np.meshgrid(u, v)

    phi = uu * 2.0 * math.pi
    theta = vv * math.pi
    x = -np.cos(phi) * np.sin(theta)
    y = np.cos(theta)
    z = np.sin(phi) * np.sin(theta)

    normals = np.stack([x, y, z], axis=-1).reshape(-1, 3)
    vertices = normals * radius
    uvs = np.stack([uu, 1.0 - vv], axis=-1).reshape(-1, 2)

    row = width_segments + 1
    indices = []
    for iy in range(height_segments):
        for ix in range(width_segments):
            a = iy * row + ix + 1
            b = iy * row + ix
            c = (iy + 1) * row + ix
            d = (iy + 1) * row + ix + 1
            # Degenerate triangles at the poles are skipped
            if iy != 0:
                indices.extend((a, b, d))
            if iy != height_segments - 1:
                indices.extend((b, c, d))

    return MeshData(
        vertices.astype(np.float32),
        normals.astype(np.float32),
        uvs.astype(np.float32),
        np.asarray(indices, dtype=np.uint32),
    )


def create_ring(inner_radius: float, outer_radius: float, segments: int = 64) -> MeshData:
    """
    Flat annulus lying in the XZ plane (a three.js RingGeometry rotated by
    pi/2 about X). Normals point along +Y, uvs map the ring onto a unit square.
    """
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    radii = np.array([inner_radius, outer_radius])

    rr, aa = np.meshgrid(radii, angles, indexing='ij')
    x = rr * np.cos(aa)
    z = -rr * np.sin(aa)
    vertices = np.stack([x, np.zeros_like(x), z], axis=-1).reshape(-1, 3)
    normals = np.tile([0.0, 1.0, 0.0], (vertices.shape[0], 1))
    uvs = np.stack([(x / outer_radius + 1.0) / 2.0, (-z / outer_radius + 1.0) / 2.0], axis=-1).reshape(-1, 2)

    row = segments + 1
    indices = []
    for i in range(segments):
        a = i
        b = i + row
        c = i + row + 1
        d = i + 1
        indices.extend((a, b, d, b, c, d))

    return MeshData(
        vertices.astype(np.float32),
        normals.astype(np.float32),
        uvs.astype(np.float32),
        np.asarray(indices, dtype=np.uint32),
    )


def create_orbit_path(radius: float, segments: int = 128) -> np.ndarray:
    """Returns (segments + 1, 3) points of a closed circle in the XZ plane."""
    angles = np.arange(segments + 1) / segments * 2.0 * math.pi
    points = np.column_stack([np.cos(angles) * radius, np.zeros_like(angles), np.sin(angles) * radius])
    return points.astype(np.float32)


def create_star_field(count: int = 10000, spread: float = 2000.0, rng=None) -> np.ndarray:
    """Uniform random star positions inside a cube of side `spread` centered on the origin."""
    rng = rng if rng is not None else np.random.default_rng()
    return ((rng.random((count, 3)) - 0.5) * spread).astype(np.float32)


def star_style(viewport_width):
    """Returns (point_size, opacity). Small screens get bigger, brighter stars."""
    if viewport_width < 900:
        return 1.2, 1.0
    return 0.5, 0.8


def create_asteroid_positions(belt: dict, rng=None) -> np.ndarray:
    """Random positions in the belt annulus with a little vertical scatter."""
    rng = rng if rng is not None else np.random.default_rng()
    n = belt["particle_count"]
    inner = belt["inner_radius"]
    outer = belt["outer_radius"]

    angle = rng.random(n) * 2.0 * math.pi
    radius = inner + rng.random(n) * (outer - inner)
    height = (rng.random(n) - 0.5) * 2.0
    return np.column_stack([np.cos(angle) * radius, height, np.sin(angle) * radius]).astype(np.float32)


def merge_instances(mesh: MeshData, offsets: np.ndarray) -> MeshData:
    """
    Batch many translated copies of `mesh` into one mesh so the whole set is
    drawn with a single call.
    """
    n = offsets.shape[0]
    vcount = mesh.vertex_count

    vertices = (mesh.vertices[None, :, :] + offsets[:, None, :]).reshape(-1, 3)
    normals = np.tile(mesh.normals, (n, 1))
    uvs = np.tile(mesh.uvs, (n, 1))
    base = (np.arange(n, dtype=np.uint32) * vcount)[:, None]
    indices = (mesh.indices[None, :] + base).reshape(-1)

    return MeshData(
        vertices.astype(np.float32),
        normals.astype(np.float32),
        uvs.astype(np.float32),
        indices.astype(np.uint32),
    )
