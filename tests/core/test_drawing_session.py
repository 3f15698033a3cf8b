from __future__ import annotations

import numpy as np
import pytest

from kaleido.engine.core.config import SessionConfig
from kaleido.engine.core.drawer import PointerDrawer, PointerState, ProceduralDrawer
from kaleido.engine.core.session import DrawingSession, DrawMode, SessionEvent


def _session(rasterizer, **kwargs) -> DrawingSession:  # noqa: ANN001
    kwargs.setdefault("rng", np.random.default_rng(99))
    return DrawingSession(rasterizer, **kwargs)


@pytest.mark.smoke
def test_initial_state_is_pointer_mode(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    assert s.mode is DrawMode.POINTER
    assert s.paused is False
    assert isinstance(s.active_drawer, PointerDrawer)
    assert s.procedural_drawer is None
    assert len(s.palette) == 6


def test_switch_to_procedural_creates_fresh_generator_each_time(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    s.switch_to_procedural_mode()
    first = s.procedural_drawer
    assert isinstance(first, ProceduralDrawer)
    assert s.active_drawer is first
    for _ in range(5):
        s.frame()
    assert first.generator.time > 0.0

    s.switch_to_procedural_mode()
    second = s.procedural_drawer
    assert second is not first
    assert second is not None
    assert second.generator.time == 0.0
    assert second.generator.x_oscillators[0].phase != first.generator.x_oscillators[0].phase


def test_mode_switches_clear_the_canvas(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    s.handle(SessionEvent.SWITCH_TO_PROCEDURAL)
    s.handle(SessionEvent.SWITCH_TO_POINTER)
    s.handle(SessionEvent.CLEAR)
    assert rasterizer.clears == 3
    assert s.mode is DrawMode.POINTER


def test_pointer_mode_keeps_its_color_cursor(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    drawer = s.pointer_drawer
    s.frame(PointerState(True, (600.0, 500.0), (500.0, 500.0)))
    cursor = drawer.color_cycler.cursor
    s.switch_to_procedural_mode()
    s.switch_to_pointer_mode()
    assert s.pointer_drawer is drawer
    assert drawer.color_cycler.cursor == cursor


def test_pause_freezes_procedural_drawing(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    s.switch_to_procedural_mode()
    s.frame()
    s.frame()
    drawn_calls = len(rasterizer.calls)
    assert drawn_calls == 1

    assert s.toggle_pause() is True
    gen = s.procedural_drawer.generator  # type: ignore[union-attr]
    t = gen.time
    for _ in range(3):
        assert s.frame() == 0
    assert gen.time == t
    assert len(rasterizer.calls) == drawn_calls

    s.handle(SessionEvent.TOGGLE_PAUSE)
    assert s.paused is False
    assert s.frame() > 0


def test_pause_does_not_affect_pointer_mode(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    s.toggle_pause()
    assert s.frame(PointerState(True, (600.0, 500.0), (500.0, 500.0))) == 24


def test_frame_counts_symmetry_and_mirror(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer, config=SessionConfig(symmetry=6))
    n = s.frame(PointerState(True, (510.0, 520.0), (500.0, 500.0)))
    assert n == 12
    assert s.segments_drawn == 12
    assert s.frames == 1


def test_update_config_applies_color_rate_to_both_drawers(rasterizer) -> None:  # noqa: ANN001
    s = _session(rasterizer)
    s.switch_to_procedural_mode()
    s.update_config(SessionConfig(color_rate=0.1))
    s.frame()
    assert s.pointer_drawer.color_cycler.speed == pytest.approx(0.1)
    assert s.procedural_drawer.color_cycler.speed == pytest.approx(0.1)  # type: ignore[union-attr]


def test_tick_reads_config_and_pointer_sources(rasterizer) -> None:  # noqa: ANN001
    cfg = SessionConfig(symmetry=3)
    pointer = PointerState(True, (520.0, 500.0), (500.0, 500.0))
    s = _session(rasterizer, config_source=lambda: cfg, pointer_source=lambda: pointer)
    s.tick(1 / 60)
    assert s.config.symmetry == 3
    segments, _, weight = rasterizer.calls[0]
    assert segments.shape == (6, 2, 2)
    assert weight == cfg.stroke_weight


def test_custom_trajectory_factory_receives_config_and_rng(rasterizer) -> None:  # noqa: ANN001
    from kaleido.engine.core.trajectory import TrajectoryGenerator

    seen: list[tuple[SessionConfig, np.random.Generator]] = []

    def factory(cfg: SessionConfig, rng: np.random.Generator) -> TrajectoryGenerator:
        seen.append((cfg, rng))
        return TrajectoryGenerator(time_step=cfg.time_step)

    gen_rng = np.random.default_rng(1)
    s = _session(rasterizer, rng=gen_rng, trajectory_factory=factory)
    s.switch_to_procedural_mode()
    assert seen[0][0] == s.config
    assert seen[0][1] is gen_rng


def test_procedural_frame_survives_non_finite_config(rasterizer) -> None:  # noqa: ANN001
    cfg = SessionConfig.from_mapping({"time_step": "inf", "color_rate": "inf"})
    s = _session(rasterizer, config=cfg)
    s.switch_to_procedural_mode()
    s.frame()
    assert s.frame() == 24
    color = rasterizer.calls[0][1]
    assert all(np.isfinite(color))
