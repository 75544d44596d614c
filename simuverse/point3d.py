"""A small immutable 3D point with arithmetic."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Point3D:
    """A point or vector in 3D space."""

    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> Point3D:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> Point3D:
        """Build a point from exactly three values."""
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Point3D:
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Point3D:
        return Point3D(self.x / divisor, self.y / divisor, self.z / divisor)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def offset(self, dx: float, dy: float, dz: float) -> Point3D:
        return Point3D(self.x + dx, self.y + dy, self.z + dz)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]