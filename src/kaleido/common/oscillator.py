"""
どこで: `kaleido.common.oscillator`
何を: 振幅/周波数/位相/位相ドリフトを持つ単一の正弦波オシレータ `WaveOscillator` を提供。
なぜ: 軌道生成（`engine.core.trajectory`）の 1 成分として、エンジン/IO に非依存の純粋部品が必要なため。

設計方針:
- `value(t)` は副作用なし（現在の位相に対する純関数）。
- `advance()` だけが位相を `phase += phase_drift` と変更する。位相は有界化しない（三角関数の周期性で十分）。
- 乱数既定値は `numpy.random.Generator` を引数で受け取る（暗黙のグローバル乱数は使わない）。
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

# 既定の位相ドリフト範囲 [rad/step]
DRIFT_MIN: float = 0.0005
DRIFT_MAX: float = 0.005


class Waveform(Enum):
    """オシレータの波形。"""

    SINE = "sin"
    COSINE = "cos"


class WaveOscillator:
    """単一の正弦波成分。

    引数:
        amplitude: 振幅（出力は [-amplitude, amplitude]）。
        frequency: 周波数（時間単位あたりの角速度係数）。
        phase: 初期位相 [rad]。
        phase_drift: 1 ステップあたりの位相増分 [rad]。
        waveform: `Waveform.SINE` または `Waveform.COSINE`。
    """

    __slots__ = ("amplitude", "frequency", "phase", "phase_drift", "waveform")

    def __init__(
        self,
        amplitude: float = 0.0,
        frequency: float = 1.0,
        phase: float = 0.0,
        phase_drift: float = 0.0,
        waveform: Waveform = Waveform.SINE,
    ) -> None:
        self.amplitude = float(amplitude)
        self.frequency = float(frequency)
        self.phase = float(phase)
        self.phase_drift = float(phase_drift)
        self.waveform = Waveform(waveform)

    @classmethod
    def random(
        cls,
        amplitude: float,
        frequency: float,
        *,
        rng: np.random.Generator,
        waveform: Waveform = Waveform.SINE,
    ) -> "WaveOscillator":
        """位相を [0, 2π)、ドリフトを [DRIFT_MIN, DRIFT_MAX) から一様に選んで生成する。"""
        phase = float(rng.uniform(0.0, 2.0 * math.pi))
        drift = float(rng.uniform(DRIFT_MIN, DRIFT_MAX))
        return cls(amplitude, frequency, phase, drift, waveform)

    def value(self, t: float) -> float:
        """時刻 `t` における出力を返す。"""
        x = float(t) * self.frequency + self.phase
        if self.waveform is Waveform.COSINE:
            return math.cos(x) * self.amplitude
        return math.sin(x) * self.amplitude

    def advance(self) -> None:
        """位相をドリフト量だけ進める。"""
        self.phase += self.phase_drift

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return (
            f"WaveOscillator(amplitude={self.amplitude:g}, frequency={self.frequency:g}, "
            f"phase={self.phase:g}, phase_drift={self.phase_drift:g}, "
            f"waveform={self.waveform.name})"
        )


__all__ = ["Waveform", "WaveOscillator", "DRIFT_MIN", "DRIFT_MAX"]
