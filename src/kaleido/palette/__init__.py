"""Public entrypoint for kaleido's palette helpers.

Re-exports the color cycler and the color parsing helpers so callers can
import from ``kaleido.palette`` instead of individual submodules.
"""

from .color_types import RGBA, lerp_color, normalize_color, parse_hex_color_str, to_u8_rgba
from .cycler import DEFAULT_COLOR_SPEED, DEFAULT_HEX_PALETTE, ColorCycler, resolve_palette

__all__ = [
    "RGBA",
    "ColorCycler",
    "DEFAULT_COLOR_SPEED",
    "DEFAULT_HEX_PALETTE",
    "resolve_palette",
    "lerp_color",
    "normalize_color",
    "parse_hex_color_str",
    "to_u8_rgba",
]
