"""Palette cursor that cycles smoothly through a fixed list of colors.

Each drawer owns one :class:`ColorCycler`. Every time a segment is about to
be drawn the cursor advances by ``speed`` and the color is interpolated
between the two palette entries around the cursor.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from kaleido.common.types import RGBA

from .color_types import lerp_color, normalize_color

logger = logging.getLogger(__name__)

# raisin-black, silver, platinum, night, space-cadet, battleship-gray
DEFAULT_HEX_PALETTE: tuple[str, ...] = (
    "#232327ff",
    "#A7A5A3ff",
    "#E5E5E3ff",
    "#131213ff",
    "#32384Dff",
    "#959494ff",
)

DEFAULT_COLOR_SPEED: float = 0.01


def resolve_palette(colors: Iterable[object] | None) -> list[RGBA]:
    """Normalize user palette entries, falling back to the default palette.

    Invalid entries are skipped with a warning. An empty result (or ``None``)
    yields :data:`DEFAULT_HEX_PALETTE`, so the returned list is never empty.
    """
    out: list[RGBA] = []
    for c in colors or ():
        try:
            out.append(normalize_color(c))
        except ValueError as e:
            logger.warning("ignoring palette entry %r: %s", c, e)
    if not out:
        if colors:
            logger.warning("palette has no usable colors; using the default palette")
        out = [normalize_color(c) for c in DEFAULT_HEX_PALETTE]
    return out


class ColorCycler:
    """Interpolated palette cycler.

    Parameters
    ----------
    palette:
        One or more RGBA colors (0..1). Fixed for the cycler's lifetime.
    speed:
        Cursor increment per :meth:`next_color` call. Zero freezes the color.
    cursor:
        Initial cursor position.
    """

    def __init__(
        self,
        palette: Sequence[RGBA],
        *,
        speed: float = DEFAULT_COLOR_SPEED,
        cursor: float = 0.0,
    ) -> None:
        if len(palette) == 0:
            raise ValueError("palette must contain at least one color")
        self._palette: tuple[RGBA, ...] = tuple(palette)
        self.speed = float(speed)
        self.cursor = float(cursor)

    @property
    def palette(self) -> tuple[RGBA, ...]:
        return self._palette

    def color_at(self, cursor: float) -> RGBA:
        """Return the blended color for an arbitrary cursor (no side effect)."""
        n = len(self._palette)
        t = cursor % n
        i = int(math.floor(t)) % n
        j = (i + 1) % n
        return lerp_color(self._palette[i], self._palette[j], t - math.floor(t))

    def next_color(self) -> RGBA:
        """Advance the cursor by ``speed`` and return the color there."""
        self.cursor += self.speed
        return self.color_at(self.cursor)


__all__ = [
    "ColorCycler",
    "DEFAULT_HEX_PALETTE",
    "DEFAULT_COLOR_SPEED",
    "resolve_palette",
]
