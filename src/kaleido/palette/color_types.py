"""Color parsing and blending helpers used by the palette cycler.

Colors are represented everywhere as RGBA tuples of floats in ``[0, 1]``.
User-supplied colors (config file, CLI) may be hex strings or tuples in
either ``0..1`` or ``0..255``; :func:`normalize_color` accepts all of them.
"""

from __future__ import annotations

from typing import Sequence

from kaleido.common.types import RGBA


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> RGBA:
    """Parse a hex string into RGBA in [0, 1].

    Accepted forms: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA",
    "RRGGBB", "RRGGBBAA" (case-insensitive).
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _as_sequence(value: object) -> Sequence[float | int] | None:
    if isinstance(value, (list, tuple)):
        return value  # type: ignore[return-value]
    return None


def normalize_color(value: object) -> RGBA:
    """Normalize a color into RGBA in [0, 1].

    Accepts hex strings and (r, g, b[, a]) sequences in 0..1 or 0..255.
    A sequence is treated as 0..1 only when every component lies in [0, 1].
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    seq = _as_sequence(value)
    if seq is None:
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        comps = [float(v) for v in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(comps) == 3:
        comps.append(1.0 if all(0.0 <= c <= 1.0 for c in comps) else 255.0)
    if all(0.0 <= c <= 1.0 for c in comps):
        r, g, b, a = comps
        return (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))
    r8, g8, b8, a8 = (max(0, min(255, int(round(c)))) for c in comps)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """Normalize a color and convert it to 0..255 integers (for pyglet labels)."""
    r, g, b, a = normalize_color(value)
    return (
        int(round(r * 255)),
        int(round(g * 255)),
        int(round(b * 255)),
        int(round(a * 255)),
    )


def lerp_color(c1: RGBA, c2: RGBA, amount: float) -> RGBA:
    """Linearly blend two RGBA colors; ``amount`` 0 gives ``c1``, 1 gives ``c2``."""
    t = _clamp01(amount)
    return (
        c1[0] + (c2[0] - c1[0]) * t,
        c1[1] + (c2[1] - c1[1]) * t,
        c1[2] + (c2[2] - c1[2]) * t,
        c1[3] + (c2[3] - c1[3]) * t,
    )


__all__ = ["RGBA", "parse_hex_color_str", "normalize_color", "to_u8_rgba", "lerp_color"]
