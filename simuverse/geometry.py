"""Mesh generators: planes, spheres, fan circles and discs."""

from __future__ import annotations

import math
from dataclasses import dataclass

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Vec4 = tuple[float, float, float, float]


@dataclass(frozen=True)
class TexturedVertex:
    """A vertex with a position and texture coordinates."""

    pos: Vec3
    uv: Vec2


@dataclass(frozen=True)
class MeshVertex:
    """A vertex with a position, a normal and texture coordinates."""

    pos: Vec3
    normal: Vec3
    uv: Vec2


@dataclass(frozen=True)
class TangentVertex:
    """A vertex with a position and a tangent direction."""

    pos: Vec3
    tangent: Vec4


def _require_positive(**values: int) -> None:
    for name, value in values.items():
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")


@dataclass
class Plane:
    """A subdivided rectangle in the z = 0 plane."""

    h_segments: int
    v_segments: int
    width: float = 2.0
    height: float = 2.0
    x_offset: float = 0.0
    y_offset: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(h_segments=self.h_segments, v_segments=self.v_segments)

    @classmethod
    def by_pixel(
        cls, width: float, height: float, h_segments: int, v_segments: int
    ) -> Plane:
        """Build a plane with an explicit size."""
        return cls(h_segments, v_segments, width=width, height=height)

    def _most_left_x(self) -> float:
        return self.x_offset if self.x_offset != 0.0 else -self.width / 2.0

    def _most_bottom_y(self) -> float:
        if self.y_offset != 0.0:
            return self.y_offset - self.height
        return -self.height / 2.0

    def generate_vertices(self) -> tuple[list[TexturedVertex], list[int]]:
        """Return vertices column by column from the bottom left, and triangle indices."""
        segment_width = self.width / self.h_segments
        segment_height = self.height / self.v_segments
        h_gap = 1.0 / self.h_segments
        v_gap = 1.0 / self.v_segments
        left = self._most_left_x()
        bottom = self._most_bottom_y()

        vertices = [
            TexturedVertex(
                pos=(left + segment_width * h, bottom + segment_height * v, 0.0),
                uv=(h_gap * h, 1.0 - v_gap * v),
            )
            for h in range(self.h_segments + 1)
            for v in range(self.v_segments + 1)
        ]
        return vertices, self.element_indices()

    def line_indices(self) -> list[int]:
        """Return the wireframe as a list of separate line segments."""
        indices: list[int] = []
        v_point_num = self.v_segments + 1
        for v in range(1, self.v_segments + 1):
            indices += [v - 1, v]
        for h in range(1, self.h_segments + 1):
            num = v_point_num * h
            for v in range(self.v_segments + 1):
                current = num + v
                left = current - v_point_num
                if v == 0:
                    indices += [left, current]
                else:
                    indices += [current, left, current, left - 1, current, current - 1]
        return indices

    def element_indices(self) -> list[int]:
        """Return triangle-list indices, two triangles per cell."""
        indices: list[int] = []
        v_point_num = self.v_segments + 1
        for h in range(1, self.h_segments + 1):
            num = v_point_num * h
            for v in range(1, self.v_segments + 1):
                current = num + v
                left = current - v_point_num
                indices += [current, left, left - 1, current, left - 1, current - 1]
        return indices


@dataclass
class Sphere:
    """A UV sphere centred at the origin."""

    radius: float
    h_segments: int
    v_segments: int

    def __post_init__(self) -> None:
        _require_positive(h_segments=self.h_segments, v_segments=self.v_segments)

    def generate_vertices(self) -> tuple[list[MeshVertex], list[int]]:
        """Return vertices row by row from the top pole, and triangle indices."""
        phi_len = math.pi * 2.0
        theta_len = math.pi
        row_len = self.h_segments + 1

        vertices: list[MeshVertex] = []
        for iy in range(self.v_segments + 1):
            v = iy / self.v_segments
            if iy == 0:
                u_offset = 0.5 / self.h_segments
            elif iy == self.h_segments:
                u_offset = -0.5 / self.h_segments
            else:
                u_offset = 0.0

            for ix in range(row_len):
                u = ix / self.h_segments
                sin_theta = math.sin(v * theta_len)
                pos = (
                    -self.radius * math.cos(u * phi_len) * sin_theta,
                    self.radius * math.cos(v * theta_len),
                    self.radius * math.sin(u * phi_len) * sin_theta,
                )
                length = math.sqrt(sum(c * c for c in pos))
                normal = (
                    tuple(c / length for c in pos) if length > 0.0 else (math.nan,) * 3
                )
                vertices.append(MeshVertex(pos=pos, normal=normal, uv=(u + u_offset, 1.0 - v)))

        def index(row: int, col: int) -> int:
            return row * row_len + col

        indices: list[int] = []
        for iy in range(self.v_segments):
            for ix in range(self.h_segments):
                a = index(iy, ix + 1)
                b = index(iy, ix)
                c = index(iy + 1, ix)
                d = index(iy + 1, ix + 1)
                if iy != 0:
                    indices += [a, b, d]
                if iy != self.v_segments - 1:
                    indices += [b, c, d]
        return vertices, indices


def generate_circle_plane(r: float, fan_segment: int) -> tuple[list[Vec3], list[int]]:
    """Build a filled circle as a triangle list around a centre vertex."""
    vertices: list[Vec3] = [(0.0, 0.0, 0.0), (r, 0.0, 0.0)]
    indices: list[int] = []
    for i in range(1, fan_segment + 1):
        angle = math.pi * 2.0 * i / fan_segment
        vertices.append((r * math.cos(angle), r * math.sin(angle), 0.0))
        indices += [0, i, 1 if i == fan_segment else i + 1]
    return vertices, indices


def generate_disc_plane(
    min_r: float, max_r: float, fan_segment: int
) -> tuple[list[TangentVertex], list[int]]:
    """Build a flat ring between two radii, with tangents along the rim."""
    _require_positive(fan_segment=fan_segment)
    start_tangent = (0.0, 1.0, 0.0, 1.0)
    vertices = [
        TangentVertex(pos=(min_r, 0.0, 0.0), tangent=start_tangent),
        TangentVertex(pos=(max_r, 0.0, 0.0), tangent=start_tangent),
    ]
    indices: list[int] = []
    step = math.pi * 2.0 / fan_segment
    for i in range(1, fan_segment):
        angle = step * i
        tangent_angle = angle + math.pi / 2.0
        tangent = (math.cos(tangent_angle), math.sin(tangent_angle), 0.0, 1.0)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        vertices.append(TangentVertex(pos=(min_r * cos_a, min_r * sin_a, 0.0), tangent=tangent))
        vertices.append(TangentVertex(pos=(max_r * cos_a, max_r * sin_a, 0.0), tangent=tangent))
        index = i * 2
        indices += [index - 2, index - 1, index, index, index - 1, index + 1]
    index = (fan_segment - 1) * 2
    indices += [index, index + 1, 0, 0, index + 1, 1]
    return vertices, indices