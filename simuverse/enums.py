"""Simulation kinds, field animation presets and particle colouring modes."""

from __future__ import annotations

from enum import IntEnum


class SimuType(IntEnum):
    """The kind of simulation shown in the viewer."""

    FIELD = 0
    FLUID = 1
    NOISE = 2
    PBDYNAMIC = 3
    D3_FLUID = 4
    CAD = 5


class FieldAnimationType(IntEnum):
    """Preset velocity fields and fluid set-ups."""

    BASIC = 0
    JULIA_SET = 1
    SPIRL = 2
    BLACK_HOLE = 3
    POISEUILLE = 4
    LID_DRIVEN_CAVITY = 5
    CUSTOM = 6

    @classmethod
    def from_u32(cls, ty: int) -> FieldAnimationType:
        """Map a numeric selector to a preset; unknown values mean CUSTOM."""
        try:
            member = cls(ty)
        except ValueError:
            return cls.CUSTOM
        return member


class ParticleColorType(IntEnum):
    """How trajectory particles are coloured."""

    MOVEMENT_ANGLE = 0
    SPEED = 1
    UNIFORM = 2

    @classmethod
    def from_u32(cls, ty: int) -> ParticleColorType:
        """Map a numeric selector to a colouring mode; unknown values mean UNIFORM."""
        if ty == 0:
            return cls.MOVEMENT_ANGLE
        if ty == 1:
            return cls.SPEED
        return cls.UNIFORM