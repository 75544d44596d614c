"""Text helpers for displayed shader code and velocity field snippets."""

from __future__ import annotations

from collections.abc import Iterator

from .enums import FieldAnimationType

_INDENT_CHARS = " \t"


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(_INDENT_CHARS))


def _lines_keeping_newlines(code: str) -> Iterator[str]:
    parts = code.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def remove_leading_indentation(code: str) -> str:
    """Strip from every line up to as much indentation as the first line has."""
    first_line_indent = _indent_width(code)
    return "".join(
        line[min(first_line_indent, _indent_width(line)):]
        for line in _lines_keeping_newlines(code)
    )


_SNIPPETS: dict[FieldAnimationType, str] = {
    FieldAnimationType.BASIC: """
    let centered_y = f32(p.y) - 0.5 * f32(field.lattice_size.y);
    // pixel speed expressed in NDC units
    return centered_y * (field.ndc_pixel * vec2<f32>(4.0, -8.0));
    """,
    FieldAnimationType.JULIA_SET: """
    // field position mapped onto [-1.5, 1.5]
    let uv = vec2<f32>(p) / vec2<f32>(field.lattice_size);
    var q = (uv * 3.0 - vec2<f32>(1.5)) * field.proj_ratio;
    let offset = vec2<f32>(0.4, 0.5);
    for (var n: i32 = 0; n < 8; n = n + 1) {
        q = vec2<f32>(q.x * q.x - q.y * q.y, 2.0 * q.x * q.y) + offset;
    }
    return 0.6 * q;
    """,
    FieldAnimationType.BLACK_HOLE: """
    // field position mapped onto [-3.5, 3.5]
    let uv = vec2<f32>(p) / vec2<f32>(field.lattice_size);
    let q = (uv * 7.0 - vec2<f32>(3.5)) * field.proj_ratio;
    let swirl = vec2<f32>(q.y, -q.x) / dot(q, q);
    return swirl - 0.2 * q;
    """,
    FieldAnimationType.SPIRL: """
    // field position mapped onto [-25, 25]
    let uv = vec2<f32>(p) / vec2<f32>(field.lattice_size);
    let q = (uv * 50.0 - vec2<f32>(25.0)) * field.proj_ratio;
    let radius = length(q);
    let angle = atan2(q.y, q.x);
    var tangent = vec2<f32>(q.y, -q.x) / radius;
    tangent *= sin(sqrt(15.0 * radius) + angle) * length(tangent) * 50.0;
    return 15.0 * (tangent + q) * field.ndc_pixel;
    """,
}


def velocity_code_snippet(ty: FieldAnimationType) -> str:
    """Return the WGSL body computing the velocity for a preset, or '' if it has none."""
    return _SNIPPETS.get(FieldAnimationType(ty), "")