"""Position-based dynamics records: constraints, mesh colouring groups and cloth uniforms."""

from __future__ import annotations

import struct
from dataclasses import dataclass

PBD_ITER_COUNT = 15
FRAME_TIME = 0.016

_STRETCH = struct.Struct("<ffii")
_BENDING = struct.Struct("<iiif")
_BENDING_DYNAMIC = struct.Struct("<iiif")
_CLOTH_UNIFORM = struct.Struct("<2i5f")


@dataclass(frozen=True)
class StretchConstraint:
    """A distance constraint keeping two particles at their rest length."""

    rest_length: float
    particle0: int
    particle1: int
    lambda_: float = 0.0

    def shares_vertices(self, other: StretchConstraint) -> bool:
        """True when the two constraints touch at least one common particle."""
        return bool({self.particle0, self.particle1} & {other.particle0, other.particle1})

    def pack(self) -> bytes:
        """Return the 16-byte little-endian storage record."""
        return _STRETCH.pack(self.rest_length, self.lambda_, self.particle0, self.particle1)


@dataclass(frozen=True)
class BendingConstraint:
    """A triangle bending constraint on vertex v between b0 and b1."""

    v: int
    b0: int
    b1: int
    h0: float = 0.0

    def shares_vertices(self, other: BendingConstraint) -> bool:
        """True when the two constraints touch at least one common particle."""
        return bool({self.v, self.b0, self.b1} & {other.v, other.b0, other.b1})

    def pack(self) -> bytes:
        """Return the 16-byte little-endian storage record."""
        return _BENDING.pack(self.v, self.b0, self.b1, self.h0)

    def __repr__(self) -> str:
        return f"({self.v}, {self.b0}, {self.b1})"


@dataclass(frozen=True)
class BendingDynamicUniform:
    """Per-group, per-iteration parameters of the bending solver."""

    offset: int
    max_num_x: int
    # number of constraints in the current colouring group
    group_len: int
    # reciprocal of the iteration count
    invert_iter: float

    def pack(self) -> bytes:
        """Return the 16-byte little-endian uniform record."""
        return _BENDING_DYNAMIC.pack(
            self.offset, self.max_num_x, self.group_len, self.invert_iter
        )


@dataclass(frozen=True)
class MeshColoring:
    """One colour group of constraints that can be solved in a single dispatch."""

    offset: int
    group_len: int
    thread_group: tuple[int, int]
    max_num_x: int = 0
    max_num_y: int = 0

    def push_constants_data(self) -> list[int]:
        """Return (offset, max_num_x, max_num_y, group_len) for the stretch solver."""
        return [self.offset, self.max_num_x, self.max_num_y, self.group_len]

    def bending_dynamic_uniform(self, iter_count: int) -> BendingDynamicUniform:
        """Build the bending solver parameters for the given iteration index."""
        return BendingDynamicUniform(
            offset=self.offset,
            max_num_x=self.max_num_x,
            group_len=self.group_len,
            invert_iter=1.0 / (iter_count + 1),
        )


@dataclass
class ClothUniform:
    """Cloth solver parameters shared by all compute passes."""

    num_x: int
    num_y: int
    gravity: float
    damping: float
    compliance: float
    stiffness: float
    dt: float

    @classmethod
    def for_grid(
        cls, num_x: int, num_y: int, iterations: int = PBD_ITER_COUNT
    ) -> ClothUniform:
        """Default parameters for a num_x by num_y cloth solved in iterations substeps."""
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {iterations}")
        dt = FRAME_TIME / iterations
        return cls(
            num_x=num_x,
            num_y=num_y,
            gravity=-70.0 * 0.7,
            damping=0.01,
            compliance=0.0000000016 / (dt * dt),
            stiffness=0.05,
            dt=dt,
        )

    def apply_controls(
        self, damping: float, gravity: float, compliance: float, stiffness: float
    ) -> bool:
        """Take control panel values (normalised); return whether the uniform changed."""
        new_damping = damping * 0.015
        new_gravity = gravity * -35.0 - 35.0
        new_compliance = compliance * 0.00000016 / (self.dt * self.dt)
        changed = (
            abs(new_damping - self.damping) > 0.00001
            or abs(new_gravity - self.gravity) > 0.00001
            or abs(new_compliance - self.compliance) > 0.00000000001
            or abs(stiffness - self.stiffness) > 0.00001
        )
        if changed:
            self.damping = new_damping
            self.gravity = new_gravity
            self.compliance = new_compliance
            self.stiffness = stiffness
        return changed

    def pack(self) -> bytes:
        """Return the 28-byte little-endian uniform block."""
        return _CLOTH_UNIFORM.pack(
            self.num_x,
            self.num_y,
            self.gravity,
            self.damping,
            self.compliance,
            self.stiffness,
            self.dt,
        )