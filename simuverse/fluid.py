"""CPU-side state of the D2Q9 fluid lattice and the pointer interaction on it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .enums import FieldAnimationType
from .lattice import (
    OBSTACLE_RADIUS,
    LatticeInfo,
    LatticeType,
    init_lattice_material,
    is_sd_sphere,
)

Vec2 = tuple[float, float]

# Strokes longer than this between two pointer samples are treated as a jump.
MAX_STROKE_DISTANCE = 300.0
# Upper bound of the lattice speed imposed by a pointer stroke.
MAX_EXTERNAL_FORCE = 0.12
EXTERNAL_FORCE_ITERATIONS = 90

_OBSTACLE = LatticeInfo(LatticeType.OBSTACLE, block_iter=-1, vx=0.0, vy=0.0)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _to_unsigned(value: float) -> int:
    """Truncate towards zero, saturating negative values at zero."""
    return max(0, int(value))


@dataclass
class LatticeGrid:
    """Size and cell materials of the fluid lattice laid over a canvas."""

    width: int
    height: int
    lattice_pixel_size: int
    animation_type: FieldAnimationType
    info: list[LatticeInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.animation_type = FieldAnimationType(self.animation_type)
        if not self.info:
            self.info = init_lattice_material(
                self.width, self.height, 1, self.animation_type
            )

    @classmethod
    def for_canvas(
        cls,
        canvas_width: int,
        canvas_height: int,
        scale_factor: float,
        animation_type: FieldAnimationType,
    ) -> LatticeGrid:
        """Cover the canvas with cells of ceil(2 * scale_factor) pixels."""
        pixel_size = math.ceil(2.0 * scale_factor)
        if pixel_size < 1:
            raise ValueError(f"scale factor must be positive, got {scale_factor}")
        return cls(
            width=canvas_width // pixel_size,
            height=canvas_height // pixel_size,
            lattice_pixel_size=pixel_size,
            animation_type=animation_type,
        )

    def workgroup_count(self) -> tuple[int, int, int]:
        """Compute dispatch size for 64x4 workgroups."""
        return ((self.width + 63) // 64, (self.height + 3) // 4, 1)

    def reset(self) -> None:
        """Restore the initial materials; only the Poiseuille set-up is rebuilt."""
        if self.animation_type == FieldAnimationType.POISEUILLE:
            self.info = init_lattice_material(
                self.width, self.height, 1, self.animation_type
            )

    def add_obstacle(self, x: int, y: int) -> tuple[int, list[LatticeInfo]]:
        """Place a round obstacle centred on cell (x, y).

        Returns the index of the first rewritten cell and the rewritten rows.
        """
        radius = int(OBSTACLE_RADIUS)
        min_y = y - radius
        max_y = min_y + radius * 2
        if min_y < 0 or max_y > self.height:
            raise ValueError(f"obstacle at row {y} does not fit in the lattice")
        cx, cy = x + 0.5, y + 0.5
        written: list[LatticeInfo] = []
        for row in range(min_y, max_y):
            for col in range(self.width):
                index = self.width * row + col
                offset = (col + 0.5 - cx, row + 0.5 - cy)
                if is_sd_sphere(offset, OBSTACLE_RADIUS):
                    self.info[index] = _OBSTACLE
                written.append(self.info[index])
        return self.width * min_y, written

    def add_external_force(
        self, pos: Vec2, pre_pos: Vec2
    ) -> list[tuple[int, LatticeInfo]]:
        """Push the fluid along the stroke from pre_pos to pos (in pixels).

        Returns the cell indices and the force record written to each.
        """
        if self.lattice_pixel_size < 2:
            raise ValueError("external force needs cells of at least 2 pixels")
        dx, dy = pos[0] - pre_pos[0], pos[1] - pre_pos[1]
        dis = math.hypot(dx, dy)
        force = min(0.1 * (dis / 20.0), MAX_EXTERNAL_FORCE)
        radian = math.atan2(dy, dx)
        record = LatticeInfo(
            LatticeType.EXTERNAL_FORCE,
            block_iter=EXTERNAL_FORCE_ITERATIONS,
            vx=force * math.cos(radian),
            vy=force * math.sin(radian),
        )
        count = math.ceil(dis / (self.lattice_pixel_size - 1))
        if count == 0:
            return []
        step = dis / count
        writes: list[tuple[int, LatticeInfo]] = []
        for i in range(count):
            distance = step * i
            px = _round_half_away(pre_pos[0] + distance * math.cos(radian))
            py = _round_half_away(pre_pos[1] + distance * math.sin(radian))
            x = _to_unsigned(px) // self.lattice_pixel_size
            y = _to_unsigned(py) // self.lattice_pixel_size
            if x < 1 or x >= self.width - 2 or y < 1 or y >= self.height - 2:
                continue
            writes.append((self.width * y + x, record))
        return writes


@dataclass
class FluidInteraction:
    """Turns clicks and pointer strokes into obstacles and forces on a lattice."""

    grid: LatticeGrid
    pre_pos: Vec2 = (0.0, 0.0)

    def on_click(self, pos: Vec2) -> tuple[int, list[LatticeInfo]] | None:
        """Drop an obstacle under the pointer when it fits away from the edges."""
        if pos[0] <= 0.0 or pos[1] <= 0.0:
            return None
        size = self.grid.lattice_pixel_size
        x = _to_unsigned(pos[0]) // size
        y = _to_unsigned(pos[1]) // size
        half = int(OBSTACLE_RADIUS)
        if (
            x < half
            or x >= self.grid.width - (half + 2)
            or y < half
            or y >= self.grid.height - (half + 2)
        ):
            return None
        return self.grid.add_obstacle(x, y)

    def touch_begin(self) -> None:
        self.pre_pos = (0.0, 0.0)

    def touch_move(self, pos: Vec2) -> list[tuple[int, LatticeInfo]]:
        """Apply a force along the stroke from the previous pointer position."""
        if pos[0] <= 0.0 or pos[1] <= 0.0:
            self.pre_pos = (0.0, 0.0)
            return []
        dis = math.hypot(pos[0] - self.pre_pos[0], pos[1] - self.pre_pos[1])
        if self.pre_pos == (0.0, 0.0) or dis > MAX_STROKE_DISTANCE:
            self.pre_pos = (float(pos[0]), float(pos[1]))
            return []
        writes = self.grid.add_external_force(pos, self.pre_pos)
        self.pre_pos = (float(pos[0]), float(pos[1]))
        return writes

    def reset(self) -> None:
        self.grid.reset()
        self.pre_pos = (0.0, 0.0)