"""Software rasterisation of triangle meshes into a 32-bit ARGB pixel buffer."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .geometry import point_in_triangle
from .models import BoundingBox, Float3, Int2Vec, Mesh, Triangle

NEAR_PLANE = 0.1
FAR_PLANE = 1000.0
FIELD_OF_VIEW = 90.0
_PI = 3.14159
_ZERO_ROWS = ((0.0, 0.0, 0.0, 0.0),) * 4


@dataclass(frozen=True)
class Matrix4:
    """A 4x4 matrix stored row by row, applied to row vectors."""

    m: tuple[tuple[float, ...], ...] = _ZERO_ROWS

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.m)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a Matrix4 needs 4 rows of 4 values")
        object.__setattr__(self, "m", rows)


def projection_matrix(
    width: int, height: int, fov: float, near_plane: float, far_plane: float
) -> Matrix4:
    """Return a perspective projection for a screen of ``width`` x ``height``."""
    aspect = height / width
    fov_rad = 1.0 / math.tan(fov * 0.5 / 180.0 * _PI)
    depth = far_plane / (far_plane - near_plane)
    return Matrix4(
        (
            (aspect * fov_rad, 0.0, 0.0, 0.0),
            (0.0, fov_rad, 0.0, 0.0),
            (0.0, 0.0, depth, 1.0),
            (0.0, 0.0, -far_plane * near_plane / (far_plane - near_plane), 0.0),
        )
    )


def rotation_z(angle: float) -> Matrix4:
    """Return a rotation of ``angle`` radians about the z axis."""
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4(
        (
            (c, s, 0.0, 0.0),
            (-s, c, 0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def rotation_x(angle: float) -> Matrix4:
    """Return a rotation of half of ``angle`` radians about the x axis."""
    half = angle * 0.5
    c, s = math.cos(half), math.sin(half)
    return Matrix4(
        (
            (1.0, 0.0, 0.0, 0.0),
            (0.0, c, s, 0.0),
            (0.0, -s, c, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def multiply_matrix_vector(vector: Float3, matrix: Matrix4) -> Float3:
    """Transform ``vector`` (with w = 1) by ``matrix``, dividing by w when it is non-zero."""
    m = matrix.m
    x = vector.x * m[0][0] + vector.y * m[1][0] + vector.z * m[2][0] + m[3][0]
    y = vector.x * m[0][1] + vector.y * m[1][1] + vector.z * m[2][1] + m[3][1]
    z = vector.x * m[0][2] + vector.y * m[1][2] + vector.z * m[2][2] + m[3][2]
    w = vector.x * m[0][3] + vector.y * m[1][3] + vector.z * m[2][3] + m[3][3]
    if w != 0.0:
        x, y, z = x / w, y / w, z / w
    return Float3(x, y, z)


def color_from_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue into an opaque 32-bit ARGB value."""
    return (255 << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def mesh_z_bounds(mesh: Mesh) -> BoundingBox:
    """Return a bounding box whose z range covers every point of ``mesh``."""
    bounds = BoundingBox(min_z=999999.0, max_z=-999999.0)
    for tri in mesh:
        for point in tri:
            bounds.min_z = min(bounds.min_z, point.z)
            bounds.max_z = max(bounds.max_z, point.z)
    return bounds


class Rasterizer:
    """A pixel buffer and z-buffer that meshes are drawn into."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"screen size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.near_plane = NEAR_PLANE
        self.far_plane = FAR_PLANE
        self.projection = projection_matrix(
            width, height, FIELD_OF_VIEW, self.near_plane, self.far_plane
        )
        self.pixels: list[int] = [0] * (width * height)
        self.z_buffer: list[float] = [self.far_plane] * (width * height)

    def clear(self) -> None:
        """Blank the pixels and push every depth back to the far plane."""
        size = self.width * self.height
        self.pixels = [0] * size
        self.z_buffer = [self.far_plane] * size

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates off the screen are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color

    def triangle_bounds(self, tri: Triangle) -> BoundingBox:
        """Return the screen-clipped x and y bounds of ``tri``."""
        xs = [point.x for point in tri]
        ys = [point.y for point in tri]
        return BoundingBox(
            min_x=max(min(xs), 0.0),
            max_x=min(max(xs), float(self.width - 1)),
            min_y=max(min(ys), 0.0),
            max_y=min(max(ys), float(self.height - 1)),
        )

    def draw_line(self, start: Int2Vec, end: Int2Vec, color: int) -> None:
        """Draw a line from ``start`` to ``end`` with Bresenham's algorithm."""
        x, y = start.x, start.y
        dx = abs(end.x - x)
        dy = -abs(end.y - y)
        step_x = 1 if x < end.x else -1
        step_y = 1 if y < end.y else -1
        error = dx + dy
        while True:
            self.set_pixel(x, y, color)
            if x == end.x and y == end.y:
                break
            doubled = 2 * error
            if doubled >= dy:
                if x == end.x:
                    break
                error += dy
                x += step_x
            if doubled <= dx:
                if y == end.y:
                    break
                error += dx
                y += step_y

    def draw_triangle(self, tri: Triangle, color: int) -> None:
        """Draw the outline of ``tri``."""
        a, b, c = (Int2Vec(int(point.x), int(point.y)) for point in tri)
        self.draw_line(a, b, color)
        self.draw_line(b, c, color)
        self.draw_line(c, a, color)

    def fill_triangle(self, tri: Triangle, color: int) -> None:
        """Fill ``tri``, keeping pixels already covered by something nearer."""
        bounds = self.triangle_bounds(tri)
        a, b, c = tri.p
        nearest_z = min(a.z, b.z, c.z)
        for x in range(int(bounds.min_x), int(bounds.max_x) + 1):
            for y in range(int(bounds.min_y), int(bounds.max_y) + 1):
                if not point_in_triangle(a, b, c, Float3(float(x), float(y), 0.0)):
                    continue
                index = y * self.width + x
                if nearest_z < self.z_buffer[index]:
                    self.z_buffer[index] = nearest_z
                    self.pixels[index] = color

    def render_mesh(self, mesh: Mesh, rotation_angle: float) -> None:
        """Clear the buffers and draw ``mesh`` rotated by ``rotation_angle``."""
        self.clear()
        offset = -mesh_z_bounds(mesh).min_z + 2.0
        rot_z = rotation_z(rotation_angle)
        rot_x = rotation_x(rotation_angle)
        white = color_from_rgb(255, 255, 255)
        half_width = 0.5 * float(self.width)
        half_height = 0.5 * float(self.height)
        for tri in mesh:
            projected = []
            for point in tri:
                rotated = multiply_matrix_vector(
                    multiply_matrix_vector(point, rot_z), rot_x
                )
                translated = replace(rotated, z=rotated.z + offset)
                p = multiply_matrix_vector(translated, self.projection)
                projected.append(
                    Float3((p.x + 1.0) * half_width, (p.y + 1.0) * half_height, p.z)
                )
            self.fill_triangle(Triangle(tuple(projected)), white)