"""
どこで: `kaleido.engine.core.trajectory`
何を: 複数の `WaveOscillator` の和で 2D 点を時間発展させる `TrajectoryGenerator` を提供。
なぜ: 自動描画モードの線分源として、フレームごとに「前回位置 → 現在位置」の線分を生成するため。

挙動（1 フレーム 1 回の `step()`）:
- 一時停止中は no-op（位置/時刻/位相を変えず `None` を返す）。
- それ以外: 現在位置を前回位置へ退避 → 時刻 `time` で各軸の和を計算 → `time += time_step`
  → 全オシレータの位相を進める。
- 構築直後の最初のステップ（`time <= time_step`）は描画しない（`None`）。
  前回位置/現在位置がどちらも原点付近で、線を引くと不要な線になるため。

既定構成（`with_defaults`）:
- preset="single": x 軸に SINE 1 本、y 軸は 0 本（y は常に 0）。この非対称は意図的な既定値。
- preset="quad": x = SINE 2 本（f=1.0, 2.5）、y = COSINE 2 本（f=1.5, 3.0）。
- 振幅はいずれも `0.4 * radius`。
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from kaleido.common.oscillator import Waveform, WaveOscillator
from kaleido.common.types import Segment, Vec2

logger = logging.getLogger(__name__)

AMPLITUDE_RATIO: float = 0.4
DEFAULT_TIME_STEP: float = 0.01

# preset 名 → ((x 軸の周波数...), (y 軸の周波数...))
PRESETS: dict[str, tuple[tuple[float, ...], tuple[float, ...]]] = {
    "single": ((1.0,), ()),
    "quad": ((1.0, 2.5), (1.5, 3.0)),
}
DEFAULT_PRESET = "single"


class TrajectoryGenerator:
    """オシレータ和による 2D 軌道。

    引数:
        x_oscillators: x 成分のオシレータ列（空なら x=0）。
        y_oscillators: y 成分のオシレータ列（空なら y=0）。
        time_step: 1 ステップあたりの時間増分（0 で停止と同等）。
        time: 初期時刻。
    """

    def __init__(
        self,
        x_oscillators: Sequence[WaveOscillator] = (),
        y_oscillators: Sequence[WaveOscillator] = (),
        *,
        time_step: float = DEFAULT_TIME_STEP,
        time: float = 0.0,
    ) -> None:
        self.x_oscillators: tuple[WaveOscillator, ...] = tuple(x_oscillators)
        self.y_oscillators: tuple[WaveOscillator, ...] = tuple(y_oscillators)
        self.time_step = float(time_step)
        self.time = float(time)
        self._position: Vec2 = (0.0, 0.0)
        self._previous: Vec2 = (0.0, 0.0)

    @classmethod
    def with_defaults(
        cls,
        radius: float,
        *,
        rng: np.random.Generator,
        time_step: float = DEFAULT_TIME_STEP,
        preset: str = DEFAULT_PRESET,
    ) -> "TrajectoryGenerator":
        """描画半径から振幅を決め、位相/ドリフトを `rng` から選んで生成する。"""
        key = (preset or DEFAULT_PRESET).lower()
        if key not in PRESETS:
            allowed = ", ".join(sorted(PRESETS))
            raise ValueError(f"invalid trajectory preset: {preset}; allowed={allowed}")
        x_freqs, y_freqs = PRESETS[key]
        amplitude = float(radius) * AMPLITUDE_RATIO
        xs = [WaveOscillator.random(amplitude, f, rng=rng) for f in x_freqs]
        ys = [
            WaveOscillator.random(amplitude, f, rng=rng, waveform=Waveform.COSINE)
            for f in y_freqs
        ]
        logger.debug("trajectory preset=%s radius=%.1f x=%s y=%s", key, radius, xs, ys)
        return cls(xs, ys, time_step=time_step)

    # ---- 参照 -----------------------------------------------------------
    @property
    def position(self) -> Vec2:
        return self._position

    @property
    def previous_position(self) -> Vec2:
        return self._previous

    @property
    def oscillators(self) -> tuple[WaveOscillator, ...]:
        return self.x_oscillators + self.y_oscillators

    def position_at(self, t: float) -> Vec2:
        """時刻 `t` における各軸の和を返す（副作用なし）。"""
        x = sum((o.value(t) for o in self.x_oscillators), 0.0)
        y = sum((o.value(t) for o in self.y_oscillators), 0.0)
        return (float(x), float(y))

    # ---- 更新 -----------------------------------------------------------
    def step(self, *, paused: bool = False) -> Segment | None:
        """1 フレーム分進め、描画すべき線分（前回位置, 現在位置）を返す。

        一時停止中、および構築直後の最初のステップでは `None` を返す。
        """
        if paused:
            return None

        self._previous = self._position
        self._position = self.position_at(self.time)
        self.time += self.time_step
        for osc in self.oscillators:
            osc.advance()

        if self.time <= self.time_step:
            # 最初のフレームは描かず、前回位置だけ揃える
            self._previous = self._position
            return None
        return (self._previous, self._position)


__all__ = [
    "TrajectoryGenerator",
    "PRESETS",
    "DEFAULT_PRESET",
    "DEFAULT_TIME_STEP",
    "AMPLITUDE_RATIO",
]
