"""Perlin noise lookup tables and the procedural texture parameters."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass

Color = tuple[float, float, float, float]

_BASE_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36, 103, 30, 69,
    142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219,
    203, 117, 35, 11, 32, 57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230,
    220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76,
    132, 187, 208, 89, 18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173,
    186, 3, 64, 52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212, 207, 206,
    59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163,
    70, 221, 153, 101, 155, 167, 43, 172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232,
    178, 185, 112, 104, 218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162,
    241, 81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157, 184, 84, 204,
    176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93, 222, 114, 67, 29, 24, 72, 243, 141,
    128, 195, 78, 66, 215, 61, 156, 180,
)

# The classic permutation, repeated so lookups of index + 1 never wrap.
PERMUTATION: tuple[int, ...] = _BASE_PERMUTATION * 2

GRADIENT: tuple[Color, ...] = (
    (1.0, 1.0, 0.0, 0.0),
    (-1.0, 1.0, 0.0, 0.0),
    (1.0, -1.0, 0.0, 0.0),
    (-1.0, -1.0, 0.0, 0.0),
    (1.0, 0.0, 1.0, 0.0),
    (-1.0, 0.0, 1.0, 0.0),
    (1.0, 0.0, -1.0, 0.0),
    (-1.0, 0.0, -1.0, 0.0),
    (0.0, 1.0, 1.0, 0.0),
    (0.0, -1.0, 1.0, 0.0),
    (0.0, 1.0, -1.0, 0.0),
    (0.0, -1.0, -1.0, 0.0),
    (1.0, 1.0, 0.0, 0.0),
    (0.0, -1.0, 1.0, 0.0),
    (-1.0, 1.0, 0.0, 0.0),
    (0.0, -1.0, -1.0, 0.0),
)

_EPSILON = 0.00001
_TEX_PARAMS = struct.Struct("<4f4ffiffi3i")


def is_same_f32(l: float, r: float) -> bool:
    """True when the two values differ by no more than 1e-5."""
    return abs(l - r) <= _EPSILON


def is_same_color(lh: Sequence[float], rh: Sequence[float]) -> bool:
    """True when all four components match within 1e-5."""
    return all(is_same_f32(a, b) for a, b in zip(lh[:4], rh[:4]))


def permutation_hash_table() -> list[tuple[int, int, int, int]]:
    """Hash the four cube corners (aa, ab, ba, bb) for every (x, y), row y first."""
    table: list[tuple[int, int, int, int]] = []
    for y in range(256):
        for x in range(256):
            a = PERMUTATION[x] + y
            b = PERMUTATION[x + 1] + y
            table.append(
                (PERMUTATION[a], PERMUTATION[a + 1], PERMUTATION[b], PERMUTATION[b + 1])
            )
    return table


def _opaque(rgb: Sequence[float]) -> Color:
    r, g, b = rgb[:3]
    return (float(r), float(g), float(b), 1.0)


@dataclass
class TexGeneratorParams:
    """Parameters of the procedural noise texture drawn on the sphere."""

    bg_color: Color = (0.0, 0.0, 0.0, 0.0)
    front_color: Color = (0.0, 0.0, 0.0, 0.0)
    noise_scale: float = 0.0
    octave: int = 0
    lacunarity: float = 0.0
    gain: float = 0.0
    ty: int = 0

    def update(
        self,
        bg_color: Sequence[float],
        front_color: Sequence[float],
        noise_scale: float,
        octave: int,
        lacunarity: float,
        gain: float,
        ty: int,
    ) -> bool:
        """Take new settings (colours as RGB, made opaque); return whether anything changed."""
        new_bg = _opaque(bg_color)
        new_front = _opaque(front_color)
        changed = (
            not is_same_color(self.bg_color, new_bg)
            or not is_same_color(self.front_color, new_front)
            or not is_same_f32(self.noise_scale, noise_scale)
            or not is_same_f32(self.lacunarity, lacunarity)
            or not is_same_f32(self.gain, gain)
            or self.octave != octave
            or self.ty != ty
        )
        if not changed:
            return False
        self.ty = ty
        self.bg_color = new_bg
        self.front_color = new_front
        self.noise_scale = noise_scale
        self.octave = octave
        self.lacunarity = lacunarity
        self.gain = gain
        return True

    def pack(self) -> bytes:
        """Return the 64-byte little-endian uniform block."""
        return _TEX_PARAMS.pack(
            *self.bg_color,
            *self.front_color,
            self.noise_scale,
            self.octave,
            self.lacunarity,
            self.gain,
            self.ty,
            0,
            0,
            0,
        )