from __future__ import annotations

import math

import numpy as np
import pytest

from kaleido.common.oscillator import Waveform, WaveOscillator
from kaleido.engine.core.trajectory import AMPLITUDE_RATIO, TrajectoryGenerator


def _single(amplitude: float = 100.0, *, drift: float = 0.0, time_step: float = 1.0) -> TrajectoryGenerator:
    osc = WaveOscillator(amplitude=amplitude, frequency=1.0, phase=0.0, phase_drift=drift)
    return TrajectoryGenerator([osc], [], time_step=time_step)


@pytest.mark.smoke
def test_first_step_does_not_draw_then_second_step_draws() -> None:
    gen = _single()

    assert gen.step() is None
    assert gen.position == (0.0, 0.0)
    assert gen.time == 1.0

    seg = gen.step()
    assert seg is not None
    prev, cur = seg
    assert prev == (0.0, 0.0)
    assert cur[0] == pytest.approx(100.0 * math.sin(1.0))
    assert cur[0] == pytest.approx(84.147, abs=1e-3)
    assert cur[1] == 0.0


def test_consecutive_segments_share_endpoints() -> None:
    gen = _single(time_step=0.1)
    gen.step()
    s1 = gen.step()
    s2 = gen.step()
    assert s1 is not None and s2 is not None
    assert s1[1] == s2[0]


def test_paused_step_is_a_no_op() -> None:
    gen = _single(drift=0.01, time_step=0.5)
    gen.step()
    gen.step()
    state = (gen.time, gen.position, gen.previous_position, gen.x_oscillators[0].phase)

    for _ in range(5):
        assert gen.step(paused=True) is None
    assert (gen.time, gen.position, gen.previous_position, gen.x_oscillators[0].phase) == state


def test_step_advances_every_oscillator_phase() -> None:
    xs = [WaveOscillator(1.0, 1.0, 0.0, 0.1)]
    ys = [WaveOscillator(1.0, 1.0, 0.0, 0.2, Waveform.COSINE)]
    gen = TrajectoryGenerator(xs, ys, time_step=0.01)
    gen.step()
    gen.step()
    assert xs[0].phase == pytest.approx(0.2)
    assert ys[0].phase == pytest.approx(0.4)


def test_zero_time_step_never_moves() -> None:
    gen = _single(time_step=0.0)
    for _ in range(3):
        gen.step()
    assert gen.time == 0.0
    assert gen.position == (0.0, 0.0)


def test_position_is_sum_of_axis_oscillators() -> None:
    xs = [WaveOscillator(1.0, 1.0, math.pi / 2), WaveOscillator(2.0, 1.0, math.pi / 2)]
    ys = [WaveOscillator(5.0, 1.0, 0.0, waveform=Waveform.COSINE)]
    gen = TrajectoryGenerator(xs, ys)
    x, y = gen.position_at(0.0)
    assert x == pytest.approx(3.0)
    assert y == pytest.approx(5.0)


def test_no_oscillators_stays_at_origin() -> None:
    gen = TrajectoryGenerator(time_step=0.1)
    gen.step()
    seg = gen.step()
    assert seg == ((0.0, 0.0), (0.0, 0.0))


def test_with_defaults_single_preset() -> None:
    gen = TrajectoryGenerator.with_defaults(425.0, rng=np.random.default_rng(0))
    assert len(gen.x_oscillators) == 1
    assert gen.y_oscillators == ()
    assert gen.x_oscillators[0].amplitude == pytest.approx(425.0 * AMPLITUDE_RATIO)
    assert gen.x_oscillators[0].frequency == 1.0
    assert gen.time == 0.0


def test_with_defaults_quad_preset_uses_cosine_on_y() -> None:
    gen = TrajectoryGenerator.with_defaults(100.0, rng=np.random.default_rng(0), preset="quad")
    assert [o.frequency for o in gen.x_oscillators] == [1.0, 2.5]
    assert [o.frequency for o in gen.y_oscillators] == [1.5, 3.0]
    assert all(o.waveform is Waveform.COSINE for o in gen.y_oscillators)


def test_with_defaults_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        TrajectoryGenerator.with_defaults(100.0, rng=np.random.default_rng(0), preset="spiral")
