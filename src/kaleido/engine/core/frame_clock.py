"""
どこで: `kaleido.engine.core.frame_clock`
何を: 登録順に Tickable を呼ぶフレームドライバ。フレーム数と平滑化した FPS も持つ。
なぜ: セッション → レンダラ → HUD の順序を 1 か所で固定し、同じフレーム内で線分が GPU へ届くようにするため。
"""

from __future__ import annotations

import time
from typing import Iterable

from .tickable import Tickable

# FPS の指数移動平均の係数
_FPS_SMOOTHING = 0.1


class FrameClock:
    """`pyglet.clock.schedule_interval(clock.tick, 1 / fps)` で駆動する。"""

    def __init__(self, tickables: Iterable[Tickable]):
        self._tickables: tuple[Tickable, ...] = tuple(tickables)
        for t in self._tickables:
            if not isinstance(t, Tickable):
                raise TypeError(f"not tickable: {t!r}")
        self._last = time.perf_counter()
        self.frame_count = 0
        self.fps = 0.0

    def tick(self, dt: float | None = None) -> None:
        now = time.perf_counter()
        if dt is None:
            dt = now - self._last
        self._last = now

        for t in self._tickables:
            t.tick(dt)

        self.frame_count += 1
        if dt > 0.0:
            inst = 1.0 / dt
            self.fps = inst if self.fps == 0.0 else self.fps + (inst - self.fps) * _FPS_SMOOTHING


__all__ = ["FrameClock"]
