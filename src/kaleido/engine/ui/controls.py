"""
どこで: `kaleido.engine.ui.controls`
何を: キーボード操作のスライダ群 `ControlPanel`、キー割当 `KEY_BINDINGS`、ポインタ追跡 `PointerTracker`。
なぜ: 操作系を pyglet 非依存の純粋な状態として持ち、フレーム先頭でスナップショット化するため。

要点:
- スライダ範囲は `SessionConfig` の `PARAM_META` を使う（min/max/step）。
- `ControlPanel.snapshot()` はクランプ済みの `SessionConfig` を返す。
- `PointerTracker.snapshot()` の `previous` は「前回スナップショット時点の位置」
  （フレーム間のポインタ移動が 1 本の線分になる）。
- キー名は pyglet の `key.symbol_string()` と同じ表記（"UP", "SPACE", "EQUAL" など）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from kaleido.common.types import Vec2
from kaleido.engine.core.config import PARAM_META, SessionConfig
from kaleido.engine.core.drawer import PointerState
from kaleido.engine.core.session import SessionEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Nudge:
    """スライダを 1 ステップ動かすアクション。"""

    param: str
    direction: int


@dataclass(frozen=True)
class Command:
    """セッション外のアプリ操作（HUD 切替など）。"""

    name: str


KeyAction = SessionEvent | Nudge | Command

KEY_BINDINGS: dict[str, KeyAction] = {
    "M": SessionEvent.SWITCH_TO_POINTER,
    "A": SessionEvent.SWITCH_TO_PROCEDURAL,
    "SPACE": SessionEvent.TOGGLE_PAUSE,
    "P": SessionEvent.TOGGLE_PAUSE,
    "C": SessionEvent.CLEAR,
    "UP": Nudge("symmetry", +1),
    "DOWN": Nudge("symmetry", -1),
    "RIGHT": Nudge("color_rate", +1),
    "LEFT": Nudge("color_rate", -1),
    "EQUAL": Nudge("time_step", +1),
    "MINUS": Nudge("time_step", -1),
    "PERIOD": Nudge("vinyl_scale", +1),
    "COMMA": Nudge("vinyl_scale", -1),
    "BRACKETRIGHT": Nudge("stroke_weight", +1),
    "BRACKETLEFT": Nudge("stroke_weight", -1),
    "H": Command("toggle_hud"),
}


class ControlPanel:
    """キーボードで調整する設定スライダの集合。

    引数:
        initial: 初期値。
        on_vinyl_change: ビニール径が変わったときに新しい描画半径で呼ばれる（クリア用）。
    """

    def __init__(
        self,
        initial: SessionConfig | None = None,
        *,
        on_vinyl_change: Callable[[float], None] | None = None,
    ) -> None:
        self._config = (initial or SessionConfig()).sanitized()
        self._on_vinyl_change = on_vinyl_change

    @property
    def config(self) -> SessionConfig:
        return self._config

    def snapshot(self) -> SessionConfig:
        """フレーム先頭で使う設定スナップショットを返す。"""
        return self._config

    def set_value(self, param: str, value: float) -> bool:
        """スライダ範囲へクランプして値を設定し、変化したかを返す。"""
        meta = PARAM_META.get(param)
        if meta is None:
            raise KeyError(f"unknown parameter: {param}")
        v = max(float(meta["min"]), min(float(meta["max"]), float(value)))
        if meta["type"] == "int":
            v = int(round(v))
        else:
            # step 刻みの累積誤差を抑える
            v = round(v, 6)
        old = getattr(self._config, param)
        if v == old:
            return False
        self._config = replace(self._config, **{param: v}).sanitized()
        logger.debug("%s: %r -> %r", param, old, v)
        if param == "vinyl_scale" and self._on_vinyl_change is not None:
            self._on_vinyl_change(self._config.draw_radius)
        return True

    def nudge(self, param: str, direction: int) -> bool:
        """`step` だけ増減する。"""
        meta = PARAM_META[param]
        current = float(getattr(self._config, param))
        return self.set_value(param, current + float(meta["step"]) * (1 if direction > 0 else -1))

    def describe(self) -> list[tuple[str, str]]:
        """HUD 表示用の (ラベル, 値) 列。"""
        c = self._config
        return [
            ("Symmetry", f"{c.symmetry}"),
            ("Color rate", f"{c.color_rate:.3f}"),
            ("Draw speed", f"{c.time_step:.3f}"),
            ("Vinyl size", f"{c.vinyl_scale:.2f}"),
            ("Stroke", f"{c.stroke_weight:.1f}"),
        ]


class PointerTracker:
    """pyglet のマウスイベントを受け、フレーム単位の `PointerState` を作る。

    座標はキャンバス画素（y 下向き）で受け取る。pyglet の y 上向き座標は
    `flip_height` を指定すると内部で反転する。
    """

    def __init__(self, *, flip_height: int | None = None) -> None:
        self._flip_height = flip_height
        self._pressed = False
        self._position: Vec2 = (0.0, 0.0)
        self._last_frame_position: Vec2 = (0.0, 0.0)

    def _to_canvas(self, x: float, y: float) -> Vec2:
        if self._flip_height is not None:
            return (float(x), float(self._flip_height) - float(y))
        return (float(x), float(y))

    def on_motion(self, x: float, y: float) -> None:
        self._position = self._to_canvas(x, y)

    def on_press(self, x: float, y: float) -> None:
        self._pressed = True
        self._position = self._to_canvas(x, y)

    def on_drag(self, x: float, y: float) -> None:
        self._position = self._to_canvas(x, y)

    def on_release(self, x: float, y: float) -> None:
        self._pressed = False
        self._position = self._to_canvas(x, y)

    def snapshot(self) -> PointerState:
        """現在状態を返し、次フレームの `previous` を現在位置へ進める。"""
        state = PointerState(
            pressed=self._pressed,
            position=self._position,
            previous=self._last_frame_position,
        )
        self._last_frame_position = self._position
        return state


__all__ = [
    "Command",
    "ControlPanel",
    "KEY_BINDINGS",
    "KeyAction",
    "Nudge",
    "PointerTracker",
]
