from __future__ import annotations

import pytest

from kaleido.engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, float]]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_ticks_in_registration_order_and_counts_frames() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("session", log), _Recorder("renderer", log), _Recorder("hud", log)])
    clock.tick(0.5)
    clock.tick(0.25)
    assert [n for n, _ in log] == ["session", "renderer", "hud"] * 2
    assert log[0][1] == 0.5
    assert clock.frame_count == 2


def test_measures_dt_when_not_given() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("a", log)])
    clock.tick()
    assert log[0][1] >= 0.0


def test_rejects_objects_without_tick() -> None:
    with pytest.raises(TypeError):
        FrameClock([object()])  # type: ignore[list-item]


def test_fps_follows_dt() -> None:
    clock = FrameClock([])
    clock.tick(0.5)
    assert clock.fps == 2.0
    clock.tick(0.25)
    assert 2.0 < clock.fps < 4.0
