"""Cloth particle grid and its stretch and bending constraints, coloured for parallel solving."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from .pbd import BendingConstraint, MeshColoring, StretchConstraint

Vec4 = tuple[float, float, float, float]

# Usually 8 colours are enough; this is the hard upper bound.
MAX_COLOR_GROUPS = 16
_ONE_THIRD = 1.0 / 3.0
_PARTICLE = struct.Struct("<16f4i")

_C = TypeVar("_C", StretchConstraint, BendingConstraint)


@dataclass
class Particle:
    """A cloth particle with its previous position and four neighbours for normals."""

    pos: Vec4
    old_pos: Vec4
    accelerate: Vec4
    # u, v, inverse mass, padding
    uv_mass: Vec4
    connect: tuple[int, int, int, int] = (0, 0, 0, 0)

    def pack(self) -> bytes:
        """Return the 80-byte little-endian storage record."""
        return _PARTICLE.pack(
            *self.pos, *self.old_pos, *self.accelerate, *self.uv_mass, *self.connect
        )


def _require_grid(horizontal_num: int, vertical_num: int) -> None:
    if horizontal_num < 2 or vertical_num < 2:
        raise ValueError(
            f"cloth needs at least 2x2 particles, got {horizontal_num}x{vertical_num}"
        )


def _distance(lh: Sequence[float], rh: Sequence[float]) -> float:
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(lh[:3], rh[:3])))


def connect_particles(
    particles: Sequence[Particle], horizontal_num: int, vertical_num: int
) -> None:
    """Set each particle's four directly adjacent neighbours, in place."""
    last_w = horizontal_num - 1
    last_h = vertical_num - 1
    for h in range(vertical_num):
        for w in range(horizontal_num):
            i = h * horizontal_num + w
            up, down = i - horizontal_num, i + horizontal_num
            left, right = i - 1, i + 1
            if h == 0:
                if w == 0:
                    connect = (right, down, right, down)
                elif w == last_w:
                    connect = (down, left, down, left)
                else:
                    connect = (right, down, down, left)
            elif h == last_h:
                if w == 0:
                    connect = (up, right, up, right)
                elif w == last_w:
                    connect = (left, up, left, up)
                else:
                    connect = (left, up, up, right)
            elif w == 0:
                connect = (up, right, right, down)
            elif w == last_w:
                connect = (down, left, left, up)
            else:
                connect = (up, right, down, left)
            particles[i].connect = connect


def _join_free_group(
    groups: list[list[_C]], colors: list[int], taken: Sequence[int], constraint: _C
) -> None:
    """Put the constraint into the first colour not used by its neighbours."""
    for g in range(MAX_COLOR_GROUPS):
        if g in taken:
            continue
        colors.append(g)
        if len(groups) <= g:
            groups.append([])
        groups[g].append(constraint)
        return
    raise ValueError(f"constraint needs more than {MAX_COLOR_GROUPS} colour groups")


def _color_by_window(constraints: Sequence[_C], window: int) -> list[list[_C]]:
    if not constraints:
        raise ValueError("no constraints to colour")
    groups: list[list[_C]] = [[constraints[0]]]
    colors = [0]
    for i in range(1, len(constraints)):
        c = constraints[i]
        taken = [
            colors[k]
            for k in range(i - 1, max(i - window, -1), -1)
            if c.shares_vertices(constraints[k])
        ]
        _join_free_group(groups, colors, taken, c)
    return groups


def color_groups(groups: Sequence[Sequence[_C]]) -> tuple[list[MeshColoring], list[_C]]:
    """Describe each colour group by offset and length, and flatten the constraints."""
    colorings: list[MeshColoring] = []
    flat: list[_C] = []
    offset = 0
    for group in groups:
        group_len = len(group)
        colorings.append(
            MeshColoring(
                offset=offset,
                group_len=group_len,
                thread_group=((group_len + 31) // 32, 1),
            )
        )
        flat.extend(group)
        offset += group_len
    return colorings, flat


def _stretch(particles: Sequence[Particle], index0: int, index1: int) -> StretchConstraint:
    rest_length = _distance(particles[index0].pos, particles[index1].pos)
    return StretchConstraint(rest_length=rest_length, particle0=index0, particle1=index1)


def generate_stretch_constraints(
    horizontal_num: int, vertical_num: int, particles: Sequence[Particle]
) -> tuple[list[MeshColoring], list[StretchConstraint]]:
    """Build distance constraints along rows, columns and one diagonal, then colour them."""
    constraints: list[StretchConstraint] = []
    for h in range(vertical_num):
        offset_y = h * horizontal_num
        for w in range(horizontal_num):
            index0 = offset_y + w
            if h == 0:
                if w < horizontal_num - 1:
                    constraints.append(_stretch(particles, index0, index0 + 1))
                continue
            top = index0 - horizontal_num
            constraints.append(_stretch(particles, index0, top))
            if w > 0:
                constraints.append(_stretch(particles, index0, top - 1))
                constraints.append(_stretch(particles, index0, index0 - 1))
                constraints.append(_stretch(particles, top, index0 - 1))

    if not constraints:
        raise ValueError("no constraints to colour")
    groups: list[list[StretchConstraint]] = [[constraints[0]]]
    colors = [0]
    first_row_num = horizontal_num - 1
    window = horizontal_num * 2 * 4
    for i in range(1, len(constraints)):
        c = constraints[i]
        if i < first_row_num:
            # along the top edge only the previous constraint can share a vertex
            _join_free_group(groups, colors, colors[-2:], c)
            continue
        taken = [
            colors[i - j]
            for j in range(1, window)
            if i >= j and c.shares_vertices(constraints[i - j])
        ]
        _join_free_group(groups, colors, taken, c)
    return color_groups(groups)


def generate_bend_constraints(
    horizontal_num: int, vertical_num: int
) -> tuple[list[MeshColoring], list[BendingConstraint]]:
    """Build straight-line bending constraints through every interior particle."""
    constraints: list[BendingConstraint] = []
    for h in range(vertical_num):
        offset_y = h * horizontal_num
        for w in range(horizontal_num):
            v = offset_y + w
            inner_w = 0 < w < horizontal_num - 1
            if inner_w:
                constraints.append(BendingConstraint(v, v - 1, v + 1))
            if 0 < h < vertical_num - 1:
                constraints.append(
                    BendingConstraint(v, v - horizontal_num, v + horizontal_num)
                )
                if inner_w:
                    constraints.append(
                        BendingConstraint(v, v - horizontal_num - 1, v + horizontal_num + 1)
                    )
                    constraints.append(
                        BendingConstraint(v, v - horizontal_num + 1, v + horizontal_num - 1)
                    )
    return color_groups(_color_by_window(constraints, horizontal_num * 4 * 4))


def _h0(v: Particle, b0: Particle, b1: Particle) -> float:
    centroid = tuple(
        (v.pos[k] + b0.pos[k] + b1.pos[k]) * _ONE_THIRD for k in range(3)
    )
    return _distance(v.pos, centroid)


def _triangle_bend(
    particles: Sequence[Particle], horizontal_num: int, v: int, vertical: bool
) -> BendingConstraint:
    if vertical:
        b0 = v + 2 * horizontal_num
        b1 = b0 + 1
    else:
        b0 = v - 2
        b1 = b0 + horizontal_num
    h0 = _h0(particles[v], particles[b0], particles[b1])
    return BendingConstraint(v=v, b0=b0, b1=b1, h0=h0)


def generate_bend_constraints2(
    horizontal_num: int, vertical_num: int, particles: Sequence[Particle]
) -> tuple[list[MeshColoring], list[BendingConstraint]]:
    """Build triangle bending constraints across adjacent triangles, then colour them."""
    constraints: list[BendingConstraint] = []
    for h in range(vertical_num - 1):
        offset_y = h * horizontal_num
        for w in range(1, horizontal_num):
            if w + 1 < horizontal_num:
                constraints.append(
                    _triangle_bend(particles, horizontal_num, offset_y + w + 1, False)
                )
            if h == 0:
                continue
            v = offset_y + w - 1 - horizontal_num
            constraints.append(_triangle_bend(particles, horizontal_num, v, True))
    return color_groups(_color_by_window(constraints, horizontal_num * 6))


def _inverse_mass(w: int, h: int, horizontal_num: int, vertical_num: int) -> float:
    on_side = w == 0 or w == horizontal_num - 1
    if h == 0 and on_side:
        # the two top corners are pinned
        return 0.0
    if on_side or h == vertical_num - 1:
        # edge particles touch only two triangles
        return 0.2
    return 0.1


@dataclass
class ClothFabric:
    """The cloth mesh, its particles and its coloured constraints."""

    horizontal_num: int
    vertical_num: int
    vertices: list[tuple[int, int, int]]
    indices: list[int]
    particles: list[Particle]
    stretch_constraints: tuple[list[MeshColoring], list[StretchConstraint]] = field(
        default_factory=lambda: ([], [])
    )
    bend_constraints: tuple[list[MeshColoring], list[BendingConstraint]] = field(
        default_factory=lambda: ([], [])
    )

    @classmethod
    def generate(
        cls,
        horizontal_num: int,
        vertical_num: int,
        horizontal_pixel: float,
        vertical_pixel: float,
        a_pixel_on_ndc: float,
    ) -> ClothFabric:
        """Lay out a cloth of the given particle counts and pixel size, centred on the origin."""
        _require_grid(horizontal_num, vertical_num)

        vertices: list[tuple[int, int, int]] = []
        indices: list[int] = []
        for h in range(vertical_num):
            offset = horizontal_num * h
            for w in range(horizontal_num):
                vertices.append((w, h, 0))
                if h == 0 or w == 0:
                    continue
                current = offset + w
                left = current - 1
                top = current - horizontal_num
                if h % 2 == w % 2:
                    indices += [top, top - 1, left, left, current, top]
                else:
                    indices += [current, top, top - 1, top - 1, left, current]

        horizontal_step = horizontal_pixel / (horizontal_num - 1) * a_pixel_on_ndc
        vertical_step = vertical_pixel / (vertical_num - 1) * a_pixel_on_ndc
        uv_x_step = 1.0 / (horizontal_num - 1)
        uv_y_step = 1.0 / (vertical_num - 1)
        tl_x = -horizontal_step * ((horizontal_num - 1) / 2.0)
        tl_y = vertical_step * ((vertical_num - 1) / 2.0)

        particles: list[Particle] = []
        for h in range(vertical_num):
            for w in range(horizontal_num):
                p = (tl_x + horizontal_step * w, tl_y - vertical_step * h, 0.0, 0.0)
                particles.append(
                    Particle(
                        pos=p,
                        old_pos=p,
                        # a weak gravity makes the cloth float without any sense of weight
                        accelerate=(0.0, -3.98, 0.0, 0.11),
                        uv_mass=(
                            uv_x_step * w,
                            uv_y_step * h,
                            _inverse_mass(w, h, horizontal_num, vertical_num),
                            0.0,
                        ),
                    )
                )
        connect_particles(particles, horizontal_num, vertical_num)

        stretch = generate_stretch_constraints(horizontal_num, vertical_num, particles)
        bend = generate_bend_constraints2(horizontal_num, vertical_num, particles)
        return cls(
            horizontal_num=horizontal_num,
            vertical_num=vertical_num,
            vertices=vertices,
            indices=indices,
            particles=particles,
            stretch_constraints=stretch,
            bend_constraints=bend,
        )