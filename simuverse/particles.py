"""Uniform blocks and trajectory particle seeding for the field and fluid views."""

from __future__ import annotations

import math
import random
import struct
from dataclasses import dataclass

Vec2 = tuple[float, float]
IVec2 = tuple[int, int]

MAX_PARTICLE_COUNT = 205000

_FIELD_UNIFORM = struct.Struct("<2i2f2i2f2fif")
_PARTICLE_UNIFORM = struct.Struct("<4f2iifffii")
_TRAJECTORY_PARTICLE = struct.Struct("<6f")


@dataclass
class FieldUniform:
    """Shared description of the velocity field lattice and the canvas."""

    lattice_size: IVec2
    lattice_pixel_size: Vec2
    canvas_size: IVec2
    proj_ratio: Vec2
    ndc_pixel: Vec2
    # 0: pixel speed (field view); 1: lattice speed (fluid view)
    speed_ty: int = 0

    def pack(self) -> bytes:
        """Return the 48-byte little-endian uniform block."""
        return _FIELD_UNIFORM.pack(
            *self.lattice_size,
            *self.lattice_pixel_size,
            *self.canvas_size,
            *self.proj_ratio,
            *self.ndc_pixel,
            self.speed_ty,
            0.0,
        )


@dataclass
class ParticleUniform:
    """Drawing parameters shared by all trajectory particles."""

    color: tuple[float, float, float, float]
    num: IVec2
    point_size: int
    life_time: float
    fade_out_factor: float
    speed_factor: float
    color_ty: int
    # 1: only move particles, do not draw them on the canvas
    is_only_update_pos: int = 0

    def pack(self) -> bytes:
        """Return the 48-byte little-endian uniform block."""
        return _PARTICLE_UNIFORM.pack(
            *self.color,
            *self.num,
            self.point_size,
            self.life_time,
            self.fade_out_factor,
            self.speed_factor,
            self.color_ty,
            self.is_only_update_pos,
        )


@dataclass(frozen=True)
class TrajectoryParticle:
    """A particle following the field, with the position it respawns at."""

    pos: Vec2
    pos_initial: Vec2
    life_time: float
    fade: float = 0.0

    @classmethod
    def zero(cls) -> TrajectoryParticle:
        return cls((0.0, 0.0), (0.0, 0.0), 0.0, 0.0)

    def pack(self) -> bytes:
        """Return the 24-byte little-endian storage record."""
        return _TRAJECTORY_PARTICLE.pack(
            *self.pos, *self.pos_initial, self.life_time, self.fade
        )


@dataclass
class ParticleLayout:
    """Particle grid size, compute workgroup count and the padded particle list."""

    size: IVec2
    workgroup_count: tuple[int, int, int]
    particles: list[TrajectoryParticle]


def init_trajectory_particles(
    canvas_size: IVec2,
    num: IVec2,
    life_time: float,
    rng: random.Random | None = None,
) -> list[TrajectoryParticle]:
    """Scatter a jittered grid of num particles over the canvas, column by column."""
    width, height = num
    if width < 2 or height < 2:
        raise ValueError(f"particle grid must be at least 2x2, got {width}x{height}")
    rng = rng or random.Random()
    canvas_w, canvas_h = canvas_size
    step_x = canvas_w / (width - 1)
    step_y = canvas_h / (height - 1)
    max_life = 1.0 if life_time <= 0.0 else life_time
    short_lived = life_time <= 1.0

    particles: list[TrajectoryParticle] = []
    for x in range(width):
        pixel_x = step_x * x
        for y in range(height):
            pos = (
                pixel_x + rng.uniform(-step_x, step_x),
                step_y * y + rng.uniform(-step_y, step_y),
            )
            if short_lived:
                pos_initial = (rng.uniform(0.0, step_x), pos[1])
                life = 0.0
            else:
                pos_initial = pos
                life = rng.uniform(0.0, max_life)
            particles.append(TrajectoryParticle(pos, pos_initial, life, 0.0))
    return particles


def get_particles_data(
    canvas_size: IVec2,
    count: int,
    life_time: float,
    rng: random.Random | None = None,
) -> ParticleLayout:
    """Lay out about count particles in the canvas aspect, padded to MAX_PARTICLE_COUNT."""
    canvas_w, canvas_h = canvas_size
    ratio = canvas_w / canvas_h
    x = math.ceil(math.sqrt(count * ratio))
    size = (int(x), int(math.ceil(x * (1.0 / ratio))))
    workgroup_count = ((size[0] + 15) // 16, (size[1] + 15) // 16, 1)

    particles = init_trajectory_particles(canvas_size, size, life_time, rng)
    missing = MAX_PARTICLE_COUNT - len(particles)
    if missing > 0:
        particles.extend([TrajectoryParticle.zero()] * missing)
    return ParticleLayout(size, workgroup_count, particles)