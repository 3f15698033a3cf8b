"""
どこで: `kaleido.engine.ui` の HUD 表示モジュール。
何を: 現在のモード/一時停止/スライダ値/線分数を pyglet の Label でオーバーレイ描画する。
なぜ: キーボード操作の結果（スライダ値/一時停止/モード）を画面上で即座に確認できるようにするため。
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

import pyglet
from pyglet.window import Window

from ..core.tickable import Tickable

logger = logging.getLogger(__name__)

StatusProvider = Callable[[], Sequence[tuple[str, str]]]


class OverlayHUD(Tickable):
    """`status_provider` が返す (ラベル, 値) 列を左上に描画する。"""

    def __init__(
        self,
        window: Window,
        status_provider: StatusProvider,
        *,
        font_size: int = 10,
        color: tuple[int, int, int, int] = (230, 230, 230, 200),
        sample_interval: float = 0.1,
    ):
        self.window = window
        self._status_provider = status_provider
        self._color = color
        self.font_size = int(font_size)
        self._sample_interval = float(sample_interval)
        self._elapsed = 0.0
        self._labels: list[pyglet.text.Label] = []
        self._batch = pyglet.graphics.Batch()
        self.enabled = True
        # --- messages ---
        self._message: tuple[str, float] | None = None

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def show_message(self, text: str, *, duration: float = 2.0) -> None:
        """一時メッセージを表示する（`duration` 秒で消える）。"""
        self._message = (text, time.monotonic() + float(duration))

    # ---- Tickable ----------------------------------------------------------
    def tick(self, dt: float) -> None:
        self._elapsed += dt
        if self._elapsed < self._sample_interval:
            return
        self._elapsed = 0.0
        try:
            lines = [f"{k}: {v}" for k, v in self._status_provider()]
        except Exception as e:  # HUD の失敗で描画ループを止めない
            logger.debug("hud status update failed: %s", e, exc_info=True)
            return
        if self._message is not None:
            text, until = self._message
            if time.monotonic() < until:
                lines.append(text)
            else:
                self._message = None
        self._sync_labels(lines)

    def draw(self) -> None:
        if self.enabled:
            self._batch.draw()

    # ---- helpers -----------------------------------------------------------
    def _sync_labels(self, lines: Sequence[str]) -> None:
        while len(self._labels) < len(lines):
            self._labels.append(
                pyglet.text.Label(
                    "",
                    font_size=self.font_size,
                    color=self._color,
                    batch=self._batch,
                )
            )
        line_height = int(self.font_size * 1.8)
        top = self.window.height - 10 - self.font_size
        for i, label in enumerate(self._labels):
            label.text = lines[i] if i < len(lines) else ""
            label.x = 10
            label.y = top - i * line_height
