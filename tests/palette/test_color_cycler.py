from __future__ import annotations

import logging

import pytest

from kaleido.palette import DEFAULT_HEX_PALETTE, ColorCycler, normalize_color, resolve_palette

RED = (1.0, 0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


@pytest.mark.smoke
def test_next_color_advances_then_blends() -> None:
    c = ColorCycler([RED, GREEN, BLUE], speed=0.5)
    assert c.next_color() == pytest.approx((0.5, 0.5, 0.0, 1.0))
    assert c.next_color() == pytest.approx(GREEN)
    assert c.cursor == pytest.approx(1.0)


def test_cursor_wraps_to_first_color() -> None:
    c = ColorCycler([RED, GREEN, BLUE], speed=0.5, cursor=2.0)
    assert c.next_color() == pytest.approx((0.5, 0.0, 0.5, 1.0))
    assert c.next_color() == pytest.approx(RED)


def test_zero_speed_keeps_color_constant() -> None:
    c = ColorCycler([RED, GREEN], speed=0.0)
    assert {c.next_color() for _ in range(5)} == {RED}


def test_single_color_palette_is_constant() -> None:
    c = ColorCycler([BLUE], speed=0.37)
    for _ in range(10):
        assert c.next_color() == pytest.approx(BLUE)


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError):
        ColorCycler([])


def test_resolve_palette_falls_back_to_default(caplog: pytest.LogCaptureFixture) -> None:
    default = [normalize_color(h) for h in DEFAULT_HEX_PALETTE]
    assert resolve_palette(None) == default
    with caplog.at_level(logging.WARNING):
        assert resolve_palette(["not-a-color"]) == default
    assert "ignoring palette entry" in caplog.text


def test_resolve_palette_keeps_valid_entries() -> None:
    assert resolve_palette(["#ff0000", "bogus", (0, 0, 255)]) == [RED, BLUE]
