"""
どこで: `kaleido.engine.core.drawer`
何を: 線分源の共通インターフェース `Drawer`（step/draw）と 2 つの実装 `PointerDrawer`/`ProceduralDrawer`。
なぜ: 入力源（ポインタ/自動軌道）に依存せず、色 → 対称展開 → ラスタライザの流れを 1 か所で共有するため。

流れ（1 フレーム）:
    segment = drawer.step(frame)          # 入力源ごとの線分（中心基準）。None なら描かない。
    color = drawer.color_cycler.next_color()
    segments = symmetry.emit(segment, frame.config.symmetry)
    rasterizer.draw_segments(segments, color, frame.config.stroke_weight)

`step` は抽象メソッドであり、実装しないサブクラスはインスタンス化できない（TypeError）。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol, Sequence

import numpy as np

from kaleido.common.types import RGBA, Segment, Vec2
from kaleido.effects.symmetry import SymmetricRenderer
from kaleido.palette.cycler import DEFAULT_COLOR_SPEED, ColorCycler

from .config import SessionConfig
from .trajectory import TrajectoryGenerator

logger = logging.getLogger(__name__)


class Rasterizer(Protocol):
    """中心基準の線分を描画する外部コラボレータ（円形クリップ/座標変換は実装側の責務）。"""

    def draw_segments(self, segments: np.ndarray, color: RGBA, weight: float) -> None:
        """`segments`（形状 (K, 2, 2)）を同一の色/線幅で描く。"""

    def clear(self) -> None:
        """描画済みの線を消し、背景（ビニール円盤）を描き直す。"""


@dataclass(frozen=True)
class PointerState:
    """ポインタのスナップショット（キャンバス画素座標、y 下向き）。

    `previous` は前フレーム時点の位置。
    """

    pressed: bool = False
    position: Vec2 = (0.0, 0.0)
    previous: Vec2 = (0.0, 0.0)


@dataclass(frozen=True)
class FrameInput:
    """1 フレーム分の入力（フレーム先頭で 1 回だけ作る）。"""

    config: SessionConfig = field(default_factory=SessionConfig)
    pointer: PointerState = field(default_factory=PointerState)
    paused: bool = False


class Drawer(ABC):
    """線分源の基底クラス。ColorCycler を 1 つ所有する。"""

    def __init__(
        self,
        palette: Sequence[RGBA],
        *,
        color_speed: float = DEFAULT_COLOR_SPEED,
    ) -> None:
        self.color_cycler = ColorCycler(palette, speed=color_speed)

    @abstractmethod
    def step(self, frame: FrameInput) -> Segment | None:
        """このフレームで描く線分を返す（描かない場合は None）。"""
        raise NotImplementedError

    def draw(
        self,
        frame: FrameInput,
        symmetry: SymmetricRenderer,
        rasterizer: Rasterizer,
    ) -> int:
        """1 フレーム分を描画し、ラスタライザへ渡した線分数を返す。"""
        segment = self.step(frame)
        if segment is None:
            return 0
        color = self.color_cycler.next_color()
        segments = symmetry.emit(segment, frame.config.symmetry)
        rasterizer.draw_segments(segments, color, frame.config.stroke_weight)
        return int(segments.shape[0])


class PointerDrawer(Drawer):
    """押下中のポインタ移動（前フレーム → 現在）を線分にする。"""

    def step(self, frame: FrameInput) -> Segment | None:
        p = frame.pointer
        cfg = frame.config
        if not p.pressed:
            return None
        x, y = p.position
        if not (0.0 < x < cfg.canvas_width and 0.0 < y < cfg.canvas_height):
            return None
        cx, cy = cfg.center
        px, py = p.previous
        return ((px - cx, py - cy), (x - cx, y - cy))


class ProceduralDrawer(Drawer):
    """`TrajectoryGenerator` を 1 フレーム 1 回進めて線分にする。"""

    def __init__(
        self,
        generator: TrajectoryGenerator,
        palette: Sequence[RGBA],
        *,
        color_speed: float = DEFAULT_COLOR_SPEED,
    ) -> None:
        super().__init__(palette, color_speed=color_speed)
        self.generator = generator

    def step(self, frame: FrameInput) -> Segment | None:
        # 描画速度はフレームごとに設定から反映
        self.generator.time_step = frame.config.time_step
        return self.generator.step(paused=frame.paused)


__all__ = [
    "Drawer",
    "FrameInput",
    "PointerDrawer",
    "PointerState",
    "ProceduralDrawer",
    "Rasterizer",
]
