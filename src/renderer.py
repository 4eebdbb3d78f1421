import os
import logging
import OpenGL.GL as gl
import numpy as np
import glm

import geometry
from celestial_data import (ASTEROID_BELT, RINGED_PLANETS, ATMOSPHERE_PLANETS, SPACE_COLOR,
                            ORBIT_COLOR, RING_COLOR, CORONA_COLOR, GLOW_COLOR, ATMOSPHERE_COLOR,
                            hex_to_rgb)

logger = logging.getLogger(__name__)

SHADER_DIR = os.path.join(os.path.dirname(__file__), 'shaders')


def load_shader_source(name):
    with open(os.path.join(SHADER_DIR, name)) as f:
        return f.read()


class ShaderProgram:
    def __init__(self, vertex_source, fragment_source):
        self.program = self.create_program(vertex_source, fragment_source)

    def create_shader(self, source, shader_type):
        shader = gl.glCreateShader(shader_type)
        gl.glShaderSource(shader, source)
        gl.glCompileShader(shader)

        if not gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS):
            error = gl.glGetShaderInfoLog(shader).decode()
            logger.error(f"Shader compilation error ({shader_type}):\n{error}")
            raise RuntimeError(f"Shader compilation failed: {error}")
        return shader

    def create_program(self, vertex_source, fragment_source):
        vertex_shader = self.create_shader(vertex_source, gl.GL_VERTEX_SHADER)
        fragment_shader = self.create_shader(fragment_source, gl.GL_FRAGMENT_SHADER)

        program = gl.glCreateProgram()
        gl.glAttachShader(program, vertex_shader)
        gl.glAttachShader(program, fragment_shader)
        gl.glLinkProgram(program)

        if not gl.glGetProgramiv(program, gl.GL_LINK_STATUS):
            error = gl.glGetProgramInfoLog(program).decode()
            logger.error(f"Program linking error:\n{error}")
            raise RuntimeError(f"Program linking failed: {error}")

        gl.glDeleteShader(vertex_shader)
        gl.glDeleteShader(fragment_shader)
        return program

    @classmethod
    def from_files(cls, vertex_name, fragment_name):
        return cls(load_shader_source(vertex_name), load_shader_source(fragment_name))

    def use(self):
        gl.glUseProgram(self.program)

    def set_float(self, name, value):
        loc = gl.glGetUniformLocation(self.program, name)
        gl.glUniform1f(loc, value)

    def set_vec3(self, name, x, y, z):
        loc = gl.glGetUniformLocation(self.program, name)
        gl.glUniform3f(loc, x, y, z)

    def set_color(self, name, rgb):
        self.set_vec3(name, *rgb)

    def set_mat3(self, name, value):
        loc = gl.glGetUniformLocation(self.program, name)
        gl.glUniformMatrix3fv(loc, 1, gl.GL_FALSE, glm.value_ptr(value))

    def set_mat4(self, name, value):
        loc = gl.glGetUniformLocation(self.program, name)
        gl.glUniformMatrix4fv(loc, 1, gl.GL_FALSE, glm.value_ptr(value))


class GpuMesh:
    """
    Triangle mesh drawn from client-side arrays. Holds on to the numpy
    buffers since GL only keeps pointers to them.
    """

    def __init__(self, mesh: geometry.MeshData):
        self.vertices = np.ascontiguousarray(mesh.vertices, dtype=np.float32)
        self.normals = np.ascontiguousarray(mesh.normals, dtype=np.float32)
        self.uvs = np.ascontiguousarray(mesh.uvs, dtype=np.float32)
        self.indices = np.ascontiguousarray(mesh.indices, dtype=np.uint32)

    def draw(self):
        gl.glEnableClientState(gl.GL_VERTEX_ARRAY)
        gl.glEnableClientState(gl.GL_NORMAL_ARRAY)
        gl.glEnableClientState(gl.GL_TEXTURE_COORD_ARRAY)
        gl.glVertexPointer(3, gl.GL_FLOAT, 0, self.vertices)
        gl.glNormalPointer(gl.GL_FLOAT, 0, self.normals)
        gl.glTexCoordPointer(2, gl.GL_FLOAT, 0, self.uvs)
        gl.glDrawElements(gl.GL_TRIANGLES, self.indices.size, gl.GL_UNSIGNED_INT, self.indices)
        gl.glDisableClientState(gl.GL_TEXTURE_COORD_ARRAY)
        gl.glDisableClientState(gl.GL_NORMAL_ARRAY)
        gl.glDisableClientState(gl.GL_VERTEX_ARRAY)


class GpuPoints:
    """Point cloud or line strip drawn with glDrawArrays."""

    def __init__(self, points, mode=gl.GL_POINTS):
        self.points = np.ascontiguousarray(points, dtype=np.float32)
        self.mode = mode

    def draw(self):
        gl.glEnableClientState(gl.GL_VERTEX_ARRAY)
        gl.glVertexPointer(3, gl.GL_FLOAT, 0, self.points)
        gl.glDrawArrays(self.mode, 0, self.points.shape[0])
        gl.glDisableClientState(gl.GL_VERTEX_ARRAY)


class SceneRenderer:
    """Draws a SolarSystem scene. Must be created with a current GL context."""

    def __init__(self, scene):
        self.scene = scene
        self.load_shaders()
        self.build_meshes()

    def load_shaders(self):
        self.sun_shader = ShaderProgram.from_files('basic.vert', 'sun.frag')
        self.corona_shader = ShaderProgram.from_files('basic.vert', 'corona.frag')
        self.atmosphere_shader = ShaderProgram.from_files('basic.vert', 'atmosphere.frag')
        self.planet_shader = ShaderProgram.from_files('basic.vert', 'planet.frag')
        self.ring_shader = ShaderProgram.from_files('basic.vert', 'ring.frag')
        self.points_shader = ShaderProgram.from_files('points.vert', 'points.frag')

    def build_meshes(self):
        scene = self.scene
        sun_r = scene.sun_data["display_radius"]
        self.sun_mesh = GpuMesh(geometry.create_sphere(sun_r, 64, 64))
        self.corona_mesh = GpuMesh(geometry.create_sphere(sun_r * 1.5, 32, 32))
        self.glow_mesh = GpuMesh(geometry.create_sphere(sun_r * 2.0, 32, 32))

        self.planet_meshes = {}
        self.atmosphere_meshes = {}
        self.ring_meshes = {}
        for key, planet in scene.planets.items():
            r = planet.data["display_radius"]
            self.planet_meshes[key] = GpuMesh(geometry.create_sphere(r, 32, 32))
            if key in ATMOSPHERE_PLANETS:
                self.atmosphere_meshes[key] = GpuMesh(geometry.create_sphere(r * 1.05, 32, 32))
            if key in RINGED_PLANETS:
                self.ring_meshes[key] = (GpuMesh(geometry.create_ring(r * 1.2, r * 2.2, 64)), r * 1.2, r * 2.2)

        self.moon_meshes = {key: GpuMesh(geometry.create_sphere(moon.data["display_radius"], 16, 16))
                            for key, moon in scene.moons.items()}

        asteroid = geometry.create_sphere(0.05, 8, 8)
        self.asteroid_mesh = GpuMesh(geometry.merge_instances(asteroid, scene.asteroid_positions))
        self.star_points = GpuPoints(scene.star_positions)
        self.orbit_lines = [GpuPoints(path, gl.GL_LINE_STRIP) for path in scene.orbital_paths.values()]

    def _set_matrices(self, shader, model, view, projection):
        shader.set_mat4("model", model)
        shader.set_mat4("view", view)
        shader.set_mat4("projection", projection)
        shader.set_mat3("normalMatrix", glm.inverseTranspose(glm.mat3(view * model)))

    def render(self, camera, width, height):
        scene = self.scene
        r, g, b = hex_to_rgb(SPACE_COLOR)
        gl.glViewport(0, 0, width, height)
        gl.glClearColor(r, g, b, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_VERTEX_PROGRAM_POINT_SIZE)

        view = camera.get_view_matrix()
        projection = camera.get_projection_matrix()
        # Sun sits at the origin
        light_position = glm.vec3(view * glm.vec4(0.0, 0.0, 0.0, 1.0))

        self.draw_stars(view, projection, width, height)
        if scene.show_orbits:
            self.draw_orbits(view, projection)
        self.draw_planets(view, projection, light_position)
        self.draw_sun(view, projection)
        self.draw_transparent(view, projection)

    def draw_stars(self, view, projection, width, height):
        size, opacity = geometry.star_style(width)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        shader = self.points_shader
        shader.use()
        shader.set_mat4("model", self.scene.star_matrix())
        shader.set_mat4("view", view)
        shader.set_mat4("projection", projection)
        shader.set_float("pointSize", size)
        shader.set_float("scale", height / 2.0)
        shader.set_color("color", (1.0, 1.0, 1.0))
        shader.set_float("opacity", opacity)
        self.star_points.draw()
        gl.glDisable(gl.GL_BLEND)

    def draw_orbits(self, view, projection):
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        gl.glLineWidth(2.0)
        shader = self.points_shader
        shader.use()
        shader.set_mat4("model", glm.mat4(1.0))
        shader.set_mat4("view", view)
        shader.set_mat4("projection", projection)
        shader.set_float("pointSize", 1.0)
        shader.set_float("scale", 0.0)
        shader.set_color("color", hex_to_rgb(ORBIT_COLOR))
        shader.set_float("opacity", 0.7)
        for line in self.orbit_lines:
            line.draw()
        gl.glDisable(gl.GL_BLEND)

    def _use_lit(self, color, light_position, shininess, emissive_scale):
        shader = self.planet_shader
        shader.use()
        shader.set_color("color", color)
        shader.set_color("emissive", tuple(c * emissive_scale for c in color))
        ambient = hex_to_rgb(0x404040)
        shader.set_color("ambientColor", tuple(c * 0.1 for c in ambient))
        shader.set_vec3("lightPosition", light_position.x, light_position.y, light_position.z)
        shader.set_float("lightIntensity", 2.0)
        shader.set_float("shininess", shininess)
        return shader

    def draw_planets(self, view, projection, light_position):
        scene = self.scene
        gl.glEnable(gl.GL_CULL_FACE)
        gl.glCullFace(gl.GL_BACK)
        for key, planet in scene.planets.items():
            shader = self._use_lit(hex_to_rgb(planet.data["color"]), light_position, 10.0, 0.2)
            self._set_matrices(shader, scene.planet_matrix(key), view, projection)
            self.planet_meshes[key].draw()

        for key, moon in scene.moons.items():
            shader = self._use_lit(hex_to_rgb(moon.data["color"]), light_position, 0.0, 0.0)
            self._set_matrices(shader, scene.moon_matrix(key), view, projection)
            self.moon_meshes[key].draw()

        shader = self._use_lit(hex_to_rgb(ASTEROID_BELT["color"]), light_position, 30.0, 0.0)
        self._set_matrices(shader, scene.asteroid_matrix(), view, projection)
        self.asteroid_mesh.draw()
        gl.glDisable(gl.GL_CULL_FACE)

    def draw_sun(self, view, projection):
        scene = self.scene
        shader = self.sun_shader
        shader.use()
        shader.set_float("time", scene.time)
        shader.set_color("color", hex_to_rgb(scene.sun_data["color"]))
        shader.set_float("intensity", 1.5)
        self._set_matrices(shader, scene.sun_matrix(), view, projection)
        self.sun_mesh.draw()

    def draw_transparent(self, view, projection):
        scene = self.scene
        gl.glEnable(gl.GL_BLEND)
        gl.glDepthMask(gl.GL_FALSE)

        # Saturn's rings: normal blending, both faces
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        for key, (mesh, inner, outer) in self.ring_meshes.items():
            shader = self.ring_shader
            shader.use()
            shader.set_color("color", hex_to_rgb(RING_COLOR))
            shader.set_float("opacity", 0.6)
            shader.set_float("innerRadius", inner)
            shader.set_float("outerRadius", outer)
            self._set_matrices(shader, scene.planet_matrix(key), view, projection)
            mesh.draw()

        # Additive glows
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE)
        sun_model = scene.sun_matrix()

        shader = self.corona_shader
        shader.use()
        shader.set_float("time", scene.time)
        shader.set_color("color", hex_to_rgb(CORONA_COLOR))
        shader.set_float("opacity", 0.3)
        self._set_matrices(shader, sun_model, view, projection)
        self.corona_mesh.draw()

        # Glow and atmosphere render their back faces only
        gl.glEnable(gl.GL_CULL_FACE)
        gl.glCullFace(gl.GL_FRONT)
        shader = self.atmosphere_shader
        shader.use()
        shader.set_color("color", hex_to_rgb(GLOW_COLOR))
        shader.set_float("opacity", 0.1)
        self._set_matrices(shader, sun_model, view, projection)
        self.glow_mesh.draw()

        for key, mesh in self.atmosphere_meshes.items():
            shader.set_color("color", hex_to_rgb(ATMOSPHERE_COLOR))
            shader.set_float("opacity", 0.3)
            self._set_matrices(shader, scene.planet_matrix(key), view, projection)
            mesh.draw()

        gl.glCullFace(gl.GL_BACK)
        gl.glDisable(gl.GL_CULL_FACE)
        gl.glDepthMask(gl.GL_TRUE)
        gl.glDisable(gl.GL_BLEND)
