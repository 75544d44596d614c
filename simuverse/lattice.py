"""D2Q9 lattice Boltzmann uniforms and lattice cell materials."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntEnum

from .enums import FieldAnimationType

OBSTACLE_RADIUS = 28.0

# D2Q9 directions laid out as
#   6 2 5
#   3 0 1
#   7 4 8
# each entry: (ex, ey, weight, max value)
E_W_MAX: tuple[tuple[float, float, float, float], ...] = (
    (0.0, 0.0, 0.444444, 0.6),
    (1.0, 0.0, 0.111111, 0.2222),
    (0.0, -1.0, 0.111111, 0.2222),
    (-1.0, 0.0, 0.111111, 0.2222),
    (0.0, 1.0, 0.111111, 0.2222),
    (1.0, -1.0, 0.0277777, 0.1111),
    (-1.0, -1.0, 0.0277777, 0.1111),
    (-1.0, 1.0, 0.0277777, 0.1111),
    (1.0, 1.0, 0.0277777, 0.1111),
)

INVERSED_DIRECTION: tuple[int, ...] = (0, 3, 4, 1, 2, 7, 8, 5, 6)

_LBM_HEADER = struct.Struct("<ffii")
_LATTICE_INFO = struct.Struct("<iiff")


@dataclass
class LbmUniform:
    """Relaxation time and lattice constants for the collide-and-stream shader."""

    tau: float
    # 0: poiseuille, 1: lid-driven cavity
    fluid_ty: int
    # offset between direction planes in the structure-of-arrays buffer
    soa_offset: int
    omega: float = field(init=False)

    def __post_init__(self) -> None:
        self.omega = 1.0 / self.tau

    def pack(self) -> bytes:
        """Return the 304-byte little-endian uniform block."""
        header = _LBM_HEADER.pack(self.tau, self.omega, self.fluid_ty, self.soa_offset)
        weights = struct.pack("<36f", *(v for row in E_W_MAX for v in row))
        inverse = struct.pack("<36i", *(d for d in INVERSED_DIRECTION for _ in range(4)))
        return header + weights + inverse


class LatticeType(IntEnum):
    """Material of a lattice cell."""

    BULK = 1
    BOUNDARY = 2
    INLET = 3
    OBSTACLE = 4
    OUTLET = 5
    EXTERNAL_FORCE = 6
    GHOST = 7


@dataclass(frozen=True)
class LatticeInfo:
    """Per-cell material with an optional imposed velocity."""

    material: int
    # countdown after which a dynamic material reverts
    block_iter: int = -1
    vx: float = 0.0
    vy: float = 0.0

    def pack(self) -> bytes:
        """Return the 16-byte little-endian storage record."""
        return _LATTICE_INFO.pack(self.material, self.block_iter, self.vx, self.vy)


def is_sd_sphere(p: tuple[float, float], r: float) -> bool:
    """True when the offset p lies inside or on a circle of radius r."""
    return math.hypot(p[0], p[1]) <= r


def _cell(
    x: int, y: int, z: int, nx: int, ny: int, nz: int,
    ty: FieldAnimationType, spheres: tuple[tuple[float, float], ...],
) -> LatticeInfo:
    if ty == FieldAnimationType.CUSTOM:
        if x == 0 or x == nx - 1 or y == 0 or y == ny - 1:
            return LatticeInfo(LatticeType.BOUNDARY)
    elif ty == FieldAnimationType.LID_DRIVEN_CAVITY:
        if x == 0 or x == nx - 1 or y == ny - 1:
            return LatticeInfo(LatticeType.BOUNDARY)
        if y == 0:
            return LatticeInfo(LatticeType.GHOST)
        if y == 1:
            return LatticeInfo(LatticeType.EXTERNAL_FORCE, vx=0.13)
    elif ty == FieldAnimationType.POISEUILLE:
        if y == 0 or y == ny - 1 or (nz > 1 and (z == 0 or z == nz - 1)):
            return LatticeInfo(LatticeType.BOUNDARY)
        if x == 0 or x == nx - 1:
            return LatticeInfo(LatticeType.GHOST)
        if x == 1:
            return LatticeInfo(LatticeType.INLET, vx=0.12)
        if x == nx - 2:
            return LatticeInfo(LatticeType.OUTLET)
        if any(is_sd_sphere((x - sx, y - sy), OBSTACLE_RADIUS) for sx, sy in spheres):
            return LatticeInfo(LatticeType.OBSTACLE)
    return LatticeInfo(LatticeType.BULK)


def init_lattice_material(
    width: int, height: int, depth: int, ty: FieldAnimationType
) -> list[LatticeInfo]:
    """Assign a material to every cell, x fastest, then y, then z."""
    ty = FieldAnimationType(ty)
    spheres = (
        (width / 7.0 - OBSTACLE_RADIUS, height / 2.0),
        (width / 5.0, height / 4.0),
        (width / 5.0, height * 0.75),
    )
    return [
        _cell(x, y, z, width, height, depth, ty, spheres)
        for z in range(depth)
        for y in range(height)
        for x in range(width)
    ]