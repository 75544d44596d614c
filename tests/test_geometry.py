import math

import pytest

from simuverse.geometry import (
    Plane,
    Sphere,
    generate_circle_plane,
    generate_disc_plane,
)


@pytest.mark.parametrize("h, v", [(1, 1), (3, 2), (5, 7)])
def test_plane_vertex_and_index_counts(h, v):
    vertices, indices = Plane(h, v).generate_vertices()
    assert len(vertices) == (h + 1) * (v + 1)
    assert len(indices) == 6 * h * v
    assert all(0 <= i < len(vertices) for i in indices)


def test_plane_extent_matches_size():
    plane = Plane.by_pixel(8.0, 4.0, 4, 2)
    vertices, _ = plane.generate_vertices()
    xs = [vx.pos[0] for vx in vertices]
    ys = [vx.pos[1] for vx in vertices]
    assert min(xs) == pytest.approx(-4.0)
    assert max(xs) == pytest.approx(4.0)
    assert min(ys) == pytest.approx(-2.0)
    assert max(ys) == pytest.approx(2.0)


def test_plane_uv_corners():
    vertices, _ = Plane(2, 2).generate_vertices()
    assert vertices[0].uv == pytest.approx((0.0, 1.0))
    assert vertices[-1].uv == pytest.approx((1.0, 0.0))


def test_plane_triangles_are_distinct_vertices():
    indices = Plane(3, 3).element_indices()
    for k in range(0, len(indices), 3):
        tri = indices[k:k + 3]
        assert len(set(tri)) == 3


def test_plane_line_indices():
    plane = Plane(3, 2)
    lines = plane.line_indices()
    count = (plane.h_segments + 1) * (plane.v_segments + 1)
    assert len(lines) % 2 == 0
    assert all(0 <= i < count for i in lines)
    for k in range(0, len(lines), 2):
        assert lines[k] != lines[k + 1]


def test_plane_rejects_zero_segments():
    with pytest.raises(ValueError):
        Plane(0, 3)


@pytest.mark.parametrize("h, v", [(8, 6), (50, 34)])
def test_sphere_counts_and_ranges(h, v):
    vertices, indices = Sphere(2.0, h, v).generate_vertices()
    assert len(vertices) == (h + 1) * (v + 1)
    assert len(indices) % 3 == 0
    assert all(0 <= i < len(vertices) for i in indices)


def test_sphere_vertices_on_surface_with_unit_normals():
    radius = 1.5
    vertices, _ = Sphere(radius, 10, 8).generate_vertices()
    for vx in vertices:
        assert math.dist(vx.pos, (0.0, 0.0, 0.0)) == pytest.approx(radius)
        assert math.hypot(*vx.normal) == pytest.approx(1.0)
    assert vertices[0].pos[1] == pytest.approx(radius)
    assert vertices[-1].pos[1] == pytest.approx(-radius)


def test_circle_plane():
    r, fan = 2.0, 12
    vertices, indices = generate_circle_plane(r, fan)
    assert len(vertices) == fan + 2
    assert len(indices) == 3 * fan
    assert indices[-3:] == [0, fan, 1]
    for pos in vertices[1:]:
        assert math.hypot(pos[0], pos[1]) == pytest.approx(r)


def test_disc_plane():
    min_r, max_r, fan = 1.0, 3.0, 16
    vertices, indices = generate_disc_plane(min_r, max_r, fan)
    assert len(vertices) == 2 * fan
    assert len(indices) == 6 * fan
    assert all(0 <= i < len(vertices) for i in indices)
    for k, vx in enumerate(vertices):
        expected = min_r if k % 2 == 0 else max_r
        assert math.hypot(vx.pos[0], vx.pos[1]) == pytest.approx(expected)
        assert math.hypot(*vx.tangent[:3]) == pytest.approx(1.0)


def test_disc_plane_rejects_zero_segments():
    with pytest.raises(ValueError):
        generate_disc_plane(1.0, 2.0, 0)