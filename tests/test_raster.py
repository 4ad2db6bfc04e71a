import math

import pytest

from softraster.models import Float3, Int2Vec, Mesh, Triangle
from softraster.raster import (
    FAR_PLANE,
    NEAR_PLANE,
    Matrix4,
    Rasterizer,
    color_from_rgb,
    mesh_z_bounds,
    multiply_matrix_vector,
    projection_matrix,
    rotation_x,
    rotation_z,
)

IDENTITY = Matrix4(
    ((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1))
)


def _lit(raster):
    return {
        (i % raster.width, i // raster.width)
        for i, color in enumerate(raster.pixels)
        if color
    }


def _length(v):
    return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def test_matrix_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Matrix4(((1, 0, 0), (0, 1, 0), (0, 0, 1)))


def test_identity_keeps_vector():
    v = Float3(1.5, -2.0, 3.25)
    assert multiply_matrix_vector(v, IDENTITY) == v


def test_zero_w_skips_division():
    v = Float3(2.0, 3.0, 4.0)
    no_w = Matrix4(((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 0)))
    assert multiply_matrix_vector(v, no_w) == v


def test_projection_maps_near_and_far_planes():
    proj = projection_matrix(64, 48, 90.0, NEAR_PLANE, FAR_PLANE)
    near = multiply_matrix_vector(Float3(0.0, 0.0, NEAR_PLANE), proj)
    far = multiply_matrix_vector(Float3(0.0, 0.0, FAR_PLANE), proj)
    assert near.z == pytest.approx(0.0, abs=1e-6)
    assert far.z == pytest.approx(1.0, rel=1e-6)


def test_projection_scales_by_aspect_ratio():
    proj = projection_matrix(64, 48, 90.0, NEAR_PLANE, FAR_PLANE)
    p = multiply_matrix_vector(Float3(1.0, 1.0, 5.0), proj)
    assert p.x / p.y == pytest.approx(48 / 64)


def test_projection_ninety_degrees_has_unit_focal_length():
    proj = projection_matrix(100, 100, 90.0, NEAR_PLANE, FAR_PLANE)
    assert proj.m[1][1] == pytest.approx(1.0, rel=1e-5)
    assert proj.m[2][3] == 1.0
    assert proj.m[3][3] == 0.0


def test_rotations_at_zero_are_identity():
    v = Float3(0.3, -0.7, 1.1)
    assert multiply_matrix_vector(v, rotation_z(0.0)) == v
    assert multiply_matrix_vector(v, rotation_x(0.0)) == v


@pytest.mark.parametrize("angle", [0.3, 1.0, 2.5, -4.0])
def test_rotations_preserve_length(angle):
    v = Float3(0.3, -0.7, 1.1)
    assert _length(multiply_matrix_vector(v, rotation_z(angle))) == pytest.approx(_length(v))
    assert _length(multiply_matrix_vector(v, rotation_x(angle))) == pytest.approx(_length(v))


def test_rotation_z_quarter_turn():
    p = multiply_matrix_vector(Float3(1.0, 0.0, 0.0), rotation_z(math.pi / 2))
    assert (p.x, p.y, p.z) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)


def test_rotation_x_uses_half_angle_and_keeps_x():
    v = Float3(2.0, 1.0, 0.0)
    a = multiply_matrix_vector(v, rotation_x(2.0))
    b = multiply_matrix_vector(v, rotation_z(0.0))
    assert a.x == b.x
    full = multiply_matrix_vector(v, rotation_x(4 * math.pi))
    assert (full.x, full.y, full.z) == pytest.approx((-2.0 * -1, -1.0, 0.0), abs=1e-9)


def test_color_packing():
    assert color_from_rgb(255, 255, 255) == 0xFFFFFFFF
    assert color_from_rgb(0, 0, 0) == 0xFF000000
    c = color_from_rgb(12, 200, 77)
    assert ((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF) == (12, 200, 77)
    assert c >> 24 == 255


def test_mesh_z_bounds():
    mesh = Mesh(
        [
            Triangle((Float3(0, 0, -3.0), Float3(1, 0, 2.0), Float3(0, 1, 0.5))),
            Triangle((Float3(0, 0, 7.5), Float3(1, 0, 1.0), Float3(0, 1, 0.0))),
        ]
    )
    bounds = mesh_z_bounds(mesh)
    assert bounds.min_z == -3.0
    assert bounds.max_z == 7.5


def test_mesh_z_bounds_empty_mesh_keeps_sentinels():
    bounds = mesh_z_bounds(Mesh())
    assert bounds.min_z == 999999.0
    assert bounds.max_z == -999999.0


def test_rasterizer_starts_blank():
    r = Rasterizer(8, 6)
    assert r.pixels == [0] * 48
    assert all(z == FAR_PLANE for z in r.z_buffer)


def test_rasterizer_rejects_bad_size():
    with pytest.raises(ValueError):
        Rasterizer(0, 10)


def test_set_pixel_and_clear():
    r = Rasterizer(8, 6)
    r.set_pixel(3, 2, 7)
    r.set_pixel(-1, 2, 9)
    r.set_pixel(8, 0, 9)
    r.set_pixel(0, 6, 9)
    assert _lit(r) == {(3, 2)}
    assert r.pixels[2 * 8 + 3] == 7
    r.clear()
    assert _lit(r) == set()


def test_triangle_bounds_are_clipped():
    r = Rasterizer(20, 20)
    tri = Triangle((Float3(-5, -5, 0), Float3(30, 3, 0), Float3(4, 40, 0)))
    b = r.triangle_bounds(tri)
    assert (b.min_x, b.max_x, b.min_y, b.max_y) == (0.0, 19.0, 0.0, 19.0)


def test_triangle_bounds_inside_screen():
    r = Rasterizer(20, 20)
    tri = Triangle((Float3(2, 3, 0), Float3(9, 4, 0), Float3(5, 11, 0)))
    b = r.triangle_bounds(tri)
    assert (b.min_x, b.max_x, b.min_y, b.max_y) == (2.0, 9.0, 3.0, 11.0)


def test_draw_horizontal_line():
    r = Rasterizer(10, 10)
    r.draw_line(Int2Vec(1, 3), Int2Vec(6, 3), 5)
    assert _lit(r) == {(x, 3) for x in range(1, 7)}


def test_draw_diagonal_line_both_directions():
    forward = Rasterizer(10, 10)
    forward.draw_line(Int2Vec(0, 0), Int2Vec(4, 4), 5)
    backward = Rasterizer(10, 10)
    backward.draw_line(Int2Vec(4, 4), Int2Vec(0, 0), 5)
    assert _lit(forward) == {(i, i) for i in range(5)}
    assert _lit(backward) == _lit(forward)


def test_draw_steep_line_one_pixel_per_row():
    r = Rasterizer(10, 12)
    r.draw_line(Int2Vec(2, 1), Int2Vec(4, 9), 5)
    lit = _lit(r)
    assert (2, 1) in lit and (4, 9) in lit
    assert sorted(y for _, y in lit) == list(range(1, 10))


def test_draw_line_off_screen_is_clipped():
    r = Rasterizer(5, 5)
    r.draw_line(Int2Vec(-3, 2), Int2Vec(3, 2), 5)
    assert _lit(r) == {(x, 2) for x in range(0, 4)}


def test_draw_triangle_marks_corners():
    r = Rasterizer(20, 20)
    tri = Triangle((Float3(2.7, 2.2, 0), Float3(15.0, 2.0, 0), Float3(2.0, 15.9, 0)))
    r.draw_triangle(tri, 3)
    lit = _lit(r)
    assert {(2, 2), (15, 2), (2, 15)} <= lit
    assert (8, 8) not in lit


def test_fill_triangle_covers_inside_only():
    r = Rasterizer(20, 20)
    tri = Triangle((Float3(2, 2, 5), Float3(15, 2, 5), Float3(2, 15, 5)))
    r.fill_triangle(tri, 9)
    lit = _lit(r)
    assert (4, 4) in lit
    assert (18, 18) not in lit
    assert (14, 14) not in lit
    assert r.z_buffer[4 * 20 + 4] == 5
    assert r.z_buffer[18 * 20 + 18] == FAR_PLANE


def _pair():
    coords = (Float3(2, 2, 0), Float3(15, 2, 0), Float3(2, 15, 0))
    far = Triangle(tuple(Float3(p.x, p.y, 10.0) for p in coords))
    near = Triangle(tuple(Float3(p.x, p.y, 5.0) for p in coords))
    return far, near


def test_fill_triangle_nearer_overwrites():
    far, near = _pair()
    r = Rasterizer(20, 20)
    r.fill_triangle(far, 1)
    r.fill_triangle(near, 2)
    assert r.pixels[4 * 20 + 4] == 2


def test_fill_triangle_farther_is_hidden():
    far, near = _pair()
    r = Rasterizer(20, 20)
    r.fill_triangle(near, 2)
    r.fill_triangle(far, 1)
    assert r.pixels[4 * 20 + 4] == 2
    assert r.z_buffer[4 * 20 + 4] == 5.0


def _unit_quad():
    return Mesh(
        [
            Triangle((Float3(0, 0, 0), Float3(0, 1, 0), Float3(1, 1, 0))),
            Triangle((Float3(0, 0, 0), Float3(1, 1, 0), Float3(1, 0, 0))),
        ]
    )


def test_render_mesh_draws_white_pixels():
    r = Rasterizer(64, 48)
    r.render_mesh(_unit_quad(), 0.0)
    lit = _lit(r)
    assert lit
    white = color_from_rgb(255, 255, 255)
    assert all(r.pixels[y * 64 + x] == white for x, y in lit)
    assert all(r.z_buffer[y * 64 + x] < FAR_PLANE for x, y in lit)


def test_render_mesh_is_deterministic_and_clears():
    r = Rasterizer(64, 48)
    r.render_mesh(_unit_quad(), 0.7)
    first = list(r.pixels)
    r.render_mesh(_unit_quad(), 0.7)
    assert r.pixels == first
    r.render_mesh(Mesh(), 0.7)
    assert _lit(r) == set()