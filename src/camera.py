import math
import glm

# Polar angle is kept this far away from the poles
EPS = 0.001


class Spherical:
    """
    Camera offset from a target in spherical coordinates.
    phi is the polar angle measured from +Y, theta the azimuth around +Y
    measured from +Z (same convention as three.js).
    """
    __slots__ = ('radius', 'phi', 'theta')

    def __init__(self, radius=1.0, phi=0.0, theta=0.0):
        self.radius = float(radius)
        self.phi = float(phi)
        self.theta = float(theta)

    def __repr__(self):
        return f"Spherical(radius={self.radius:.4f}, phi={self.phi:.4f}, theta={self.theta:.4f})"

    def copy(self):
        return Spherical(self.radius, self.phi, self.theta)

    def set_from_vector(self, v):
        self.radius = glm.length(v)
        if self.radius == 0.0:
            self.phi = 0.0
            self.theta = 0.0
        else:
            self.theta = math.atan2(v.x, v.z)
            self.phi = math.acos(max(-1.0, min(1.0, v.y / self.radius)))
        return self

    def to_vector(self):
        sin_phi_radius = math.sin(self.phi) * self.radius
        return glm.vec3(
            sin_phi_radius * math.sin(self.theta),
            math.cos(self.phi) * self.radius,
            sin_phi_radius * math.cos(self.theta),
        )

    def make_safe(self):
        """Restrict phi to (EPS, pi - EPS)."""
        self.phi = max(EPS, min(math.pi - EPS, self.phi))
        return self

    @classmethod
    def from_vector(cls, v):
        return cls().set_from_vector(glm.vec3(v))


class Camera:
    def __init__(self, position=(0.0, 50.0, 100.0), fov=75.0, aspect=1.0, near=0.1, far=10000.0):
        self.position = glm.vec3(position)
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far
        self.up = glm.vec3(0.0, 1.0, 0.0)
        self.target = glm.vec3(0.0, 0.0, 0.0)

    def look_at(self, point):
        self.target = glm.vec3(point)

    def get_view_matrix(self):
        return glm.lookAt(self.position, self.target, self.up)

    def get_projection_matrix(self, aspect_ratio=None):
        if aspect_ratio is None:
            aspect_ratio = self.aspect
        return glm.perspective(glm.radians(self.fov), aspect_ratio, self.near, self.far)

    def set_aspect(self, width, height):
        if height > 0:
            self.aspect = width / height

    def get_basis(self):
        """Returns the (right, up, forward) axes of the camera in world space."""
        inv_view = glm.inverse(self.get_view_matrix())
        right = glm.vec3(inv_view[0])
        up = glm.vec3(inv_view[1])
        forward = -glm.vec3(inv_view[2])
        return right, up, forward

    def get_picking_ray(self, ndc_x, ndc_y):
        """
        Returns (origin, direction) of the world-space ray passing through the
        given normalized device coordinates.
        """
        inv = glm.inverse(self.get_projection_matrix() * self.get_view_matrix())
        near = inv * glm.vec4(ndc_x, ndc_y, -1.0, 1.0)
        far = inv * glm.vec4(ndc_x, ndc_y, 1.0, 1.0)
        near = glm.vec3(near) / near.w
        far = glm.vec3(far) / far.w
        return glm.vec3(self.position), glm.normalize(far - near)


def basis_from_offset(offset, world_up=glm.vec3(0.0, 1.0, 0.0)):
    """
    Camera right/up axes for a camera sitting at target + offset and looking at
    the target. Matches the basis glm.lookAt builds.
    """
    forward = glm.normalize(-offset)
    right = glm.cross(forward, world_up)
    if glm.length(right) < 1e-9:
        right = glm.vec3(1.0, 0.0, 0.0)
    right = glm.normalize(right)
    up = glm.cross(right, forward)
    return right, up
