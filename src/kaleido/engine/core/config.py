"""
どこで: `kaleido.engine.core.config`
何を: 1 フレーム分の設定スナップショット `SessionConfig`（対称数/線幅/色速度/描画速度/ビニール径/キャンバス）。
なぜ: 可変グローバルを廃し、フレーム先頭で 1 回だけ取得する不変スナップショットとしてセッションへ渡すため。

要点:
- 退化値（対称数 0/1、負の速度など）は `sanitized()` で範囲内へクランプし、警告ログを出す。
  コア（描画数学）へは常に妥当な値だけが届く。
- `PARAM_META` はキーボードスライダ（`engine.ui.controls`）の min/max/step を兼ねる。
- `from_mapping()` は設定ファイル（YAML の `session` セクション）からの構築に使う。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from kaleido.common.types import Vec2

logger = logging.getLogger(__name__)

# キーボードスライダの範囲と刻み
PARAM_META: dict[str, dict[str, Any]] = {
    "symmetry": {"type": "int", "min": 2, "max": 32, "step": 1},
    "stroke_weight": {"type": "float", "min": 0.5, "max": 10.0, "step": 0.5},
    "color_rate": {"type": "float", "min": 0.0, "max": 0.2, "step": 0.005},
    "time_step": {"type": "float", "min": 0.0, "max": 1.0, "step": 0.005},
    "vinyl_scale": {"type": "float", "min": 0.5, "max": 1.0, "step": 0.01},
}

DEFAULT_CANVAS_SIZE: int = 1000

_INT_FIELDS = frozenset({"symmetry", "canvas_width", "canvas_height"})


def _finite(name: str, value: Any, default: float) -> float:
    v = float(value)
    if not math.isfinite(v):
        logger.warning("%s=%r is not finite; reset to %r", name, v, default)
        return float(default)
    return v


def _clamp(name: str, value: float, lo: float, hi: float | None) -> float:
    out = max(lo, value)
    if hi is not None:
        out = min(hi, out)
    if out != value:
        logger.warning("%s=%r out of range; clamped to %r", name, value, out)
    return out


@dataclass(frozen=True)
class SessionConfig:
    """フレーム単位の設定スナップショット。

    Parameters
    ----------
    symmetry : int, default 12
        回転コピー数（>= 2）。
    stroke_weight : float, default 1.5
        線幅 [px]（> 0）。
    color_rate : float, default 0.01
        パレットカーソルの 1 描画あたり増分（>= 0）。
    time_step : float, default 0.01
        自動描画の 1 フレームあたり時間増分（>= 0, 0 で停止と同等）。
    vinyl_scale : float, default 0.85
        キャンバス幅に対するビニール円盤の直径比（描画領域）。
    canvas_width, canvas_height : int, default 1000
        キャンバスのピクセルサイズ。
    """

    symmetry: int = 12
    stroke_weight: float = 1.5
    color_rate: float = 0.01
    time_step: float = 0.01
    vinyl_scale: float = 0.85
    canvas_width: int = DEFAULT_CANVAS_SIZE
    canvas_height: int = DEFAULT_CANVAS_SIZE

    # ---- 派生値 ---------------------------------------------------------
    @property
    def draw_radius(self) -> float:
        """描画領域（ビニール円盤）の半径 [px]。"""
        return self.vinyl_scale * self.canvas_width / 2.0

    @property
    def rotation_step_degrees(self) -> float:
        return 360.0 / float(self.symmetry)

    @property
    def center(self) -> Vec2:
        return (self.canvas_width / 2.0, self.canvas_height / 2.0)

    # ---- 検証 -----------------------------------------------------------
    def sanitized(self) -> "SessionConfig":
        """各値を有効範囲へクランプした新しいスナップショットを返す。"""
        # 非有限値は既定値へ戻してからクランプする
        d = _DEFAULTS
        sym_max = PARAM_META["symmetry"]["max"]
        sym = _finite("symmetry", self.symmetry, d.symmetry)
        sym = int(round(_clamp("symmetry", sym, 2, sym_max)))
        weight = _finite("stroke_weight", self.stroke_weight, d.stroke_weight)
        if weight <= 0.0:
            weight = _clamp("stroke_weight", weight, PARAM_META["stroke_weight"]["min"], None)
        rate = _clamp("color_rate", _finite("color_rate", self.color_rate, d.color_rate), 0.0, None)
        step = _clamp("time_step", _finite("time_step", self.time_step, d.time_step), 0.0, None)
        vinyl = _finite("vinyl_scale", self.vinyl_scale, d.vinyl_scale)
        if not (0.0 < vinyl <= 1.0):
            vinyl = _clamp("vinyl_scale", vinyl, PARAM_META["vinyl_scale"]["min"], 1.0)
        width = _finite("canvas_width", self.canvas_width, d.canvas_width)
        width = int(_clamp("canvas_width", width, 1, None))
        height = _finite("canvas_height", self.canvas_height, d.canvas_height)
        height = int(_clamp("canvas_height", height, 1, None))
        return SessionConfig(
            symmetry=sym,
            stroke_weight=weight,
            color_rate=rate,
            time_step=step,
            vinyl_scale=vinyl,
            canvas_width=width,
            canvas_height=height,
        )

    def with_values(self, **changes: Any) -> "SessionConfig":
        """一部のフィールドを差し替えてクランプ済みのスナップショットを返す。"""
        return replace(self, **changes).sanitized()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SessionConfig":
        """辞書（YAML の `session` セクション等）から構築する。未知キーは無視。"""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key not in known:
                continue
            try:
                kwargs[key] = int(value) if key in _INT_FIELDS else float(value)
            except (TypeError, ValueError, OverflowError):
                logger.warning("ignoring invalid session.%s=%r", key, value)
        return cls(**kwargs).sanitized()


_DEFAULTS = SessionConfig()


__all__ = ["SessionConfig", "PARAM_META", "DEFAULT_CANVAS_SIZE"]
