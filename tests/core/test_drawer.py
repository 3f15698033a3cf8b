from __future__ import annotations

import numpy as np
import pytest

from kaleido.common.oscillator import WaveOscillator
from kaleido.effects.symmetry import SymmetricRenderer
from kaleido.engine.core.config import SessionConfig
from kaleido.engine.core.drawer import (
    Drawer,
    FrameInput,
    PointerDrawer,
    PointerState,
    ProceduralDrawer,
)
from kaleido.engine.core.trajectory import TrajectoryGenerator

PALETTE = [(1.0, 0.0, 0.0, 1.0), (0.0, 0.0, 1.0, 1.0)]
CFG = SessionConfig(symmetry=4, stroke_weight=2.0, canvas_width=200, canvas_height=100)


def test_drawer_without_step_cannot_be_instantiated() -> None:
    class Incomplete(Drawer):
        pass

    with pytest.raises(TypeError):
        Incomplete(PALETTE)  # type: ignore[abstract]


@pytest.mark.smoke
def test_pointer_drawer_converts_to_center_relative() -> None:
    drawer = PointerDrawer(PALETTE)
    frame = FrameInput(
        config=CFG, pointer=PointerState(pressed=True, position=(150.0, 60.0), previous=(100.0, 50.0))
    )
    assert drawer.step(frame) == ((0.0, 0.0), (50.0, 10.0))


@pytest.mark.parametrize(
    "position",
    [(0.0, 50.0), (200.0, 50.0), (50.0, 0.0), (50.0, 100.0), (-5.0, 50.0), (50.0, 120.0)],
)
def test_pointer_drawer_ignores_positions_outside_canvas(position: tuple[float, float]) -> None:
    drawer = PointerDrawer(PALETTE)
    frame = FrameInput(config=CFG, pointer=PointerState(True, position, (10.0, 10.0)))
    assert drawer.step(frame) is None


def test_pointer_drawer_ignores_released_pointer(rasterizer) -> None:  # noqa: ANN001
    drawer = PointerDrawer(PALETTE)
    frame = FrameInput(config=CFG, pointer=PointerState(False, (50.0, 50.0), (40.0, 40.0)))
    assert drawer.draw(frame, SymmetricRenderer(), rasterizer) == 0
    assert rasterizer.calls == []
    # 描かないフレームでは色カーソルも進まない
    assert drawer.color_cycler.cursor == 0.0


def test_draw_emits_symmetric_segments_with_color_and_weight(rasterizer) -> None:  # noqa: ANN001
    drawer = PointerDrawer(PALETTE, color_speed=0.25)
    frame = FrameInput(config=CFG, pointer=PointerState(True, (150.0, 60.0), (100.0, 50.0)))

    n = drawer.draw(frame, SymmetricRenderer(), rasterizer)

    assert n == 8
    segments, color, weight = rasterizer.calls[0]
    assert segments.shape == (8, 2, 2)
    assert color == pytest.approx((0.75, 0.0, 0.25, 1.0))
    assert weight == 2.0
    assert drawer.color_cycler.cursor == pytest.approx(0.25)


def test_procedural_drawer_applies_time_step_and_pause(rasterizer) -> None:  # noqa: ANN001
    gen = TrajectoryGenerator([WaveOscillator(10.0, 1.0)], time_step=0.5)
    drawer = ProceduralDrawer(gen, PALETTE)
    cfg = CFG.with_values(time_step=0.25)

    assert drawer.draw(FrameInput(config=cfg), SymmetricRenderer(), rasterizer) == 0
    assert gen.time_step == 0.25
    assert drawer.draw(FrameInput(config=cfg), SymmetricRenderer(), rasterizer) == 8

    time_before = gen.time
    cursor_before = drawer.color_cycler.cursor
    assert drawer.draw(FrameInput(config=cfg, paused=True), SymmetricRenderer(), rasterizer) == 0
    assert gen.time == time_before
    assert drawer.color_cycler.cursor == cursor_before
    assert len(rasterizer.calls) == 1
    np.testing.assert_allclose(rasterizer.calls[0][0][0, 0], (0.0, 0.0))
