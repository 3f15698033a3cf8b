"""
どこで: `kaleido.engine.core.session`
何を: 入力源（ポインタ/自動軌道）の切替・一時停止・クリアを管理し、毎フレーム Drawer を 1 回駆動する `DrawingSession`。
なぜ: 対称数/一時停止/現在モードをグローバル変数にせず、1 つのオブジェクトが所有する状態として扱うため。

状態:
- `DrawMode.POINTER` / `DrawMode.PROCEDURAL`、直交する `paused` フラグ。
- 自動モードへの切替は常に新しい `TrajectoryGenerator` を作る（時刻/位相はリセット）。
- ポインタモードへの切替は既存の PointerDrawer（色カーソル）を保持する。
- モード切替時はキャンバスをクリアする。

フレーム契約（`frame()`）:
1) 設定スナップショット（`update_config` 済み）を読む。
2) 両 Drawer の色速度を設定値に合わせる。
3) 現在の Drawer の `draw()` を 1 回だけ呼ぶ。

スレッド:
- 単一スレッド前提。イベント（モード切替等）は pyglet のイベントハンドラから、
  フレーム tick の合間に呼ばれる。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence

import numpy as np

from kaleido.common.types import RGBA
from kaleido.effects.symmetry import SymmetricRenderer
from kaleido.palette.cycler import resolve_palette

from .config import SessionConfig
from .drawer import Drawer, FrameInput, PointerDrawer, PointerState, ProceduralDrawer, Rasterizer
from .tickable import Tickable
from .trajectory import DEFAULT_PRESET, TrajectoryGenerator

logger = logging.getLogger(__name__)

TrajectoryFactory = Callable[[SessionConfig, np.random.Generator], TrajectoryGenerator]


class DrawMode(Enum):
    POINTER = "pointer"
    PROCEDURAL = "procedural"


class SessionEvent(Enum):
    """外部 UI からの離散イベント。"""

    SWITCH_TO_POINTER = "switch_to_pointer"
    SWITCH_TO_PROCEDURAL = "switch_to_procedural"
    TOGGLE_PAUSE = "toggle_pause"
    CLEAR = "clear"


def default_trajectory_factory(preset: str = DEFAULT_PRESET) -> TrajectoryFactory:
    """描画半径と描画速度を設定から取る既定のファクトリを返す。"""

    def _factory(config: SessionConfig, rng: np.random.Generator) -> TrajectoryGenerator:
        return TrajectoryGenerator.with_defaults(
            config.draw_radius, rng=rng, time_step=config.time_step, preset=preset
        )

    return _factory


class DrawingSession(Tickable):
    """描画セッション（オーケストレータ）。

    Parameters
    ----------
    rasterizer : Rasterizer
        線分の描画先。
    config : SessionConfig | None
        初期設定。None で既定値。
    palette : Sequence[RGBA] | None
        両 Drawer が使うパレット。None/空なら既定パレット。
    rng : np.random.Generator | None
        軌道の乱数源（テストでは固定シードを注入）。None で `default_rng()`。
    trajectory_factory : TrajectoryFactory | None
        自動モード切替時の軌道生成関数。None で `default_trajectory_factory()`。
    config_source, pointer_source : Callable | None
        `tick()` がフレーム先頭で呼ぶスナップショット取得関数。
    symmetry : SymmetricRenderer | None
        対称展開の実装。
    """

    def __init__(
        self,
        rasterizer: Rasterizer,
        *,
        config: SessionConfig | None = None,
        palette: Sequence[RGBA] | None = None,
        rng: np.random.Generator | None = None,
        trajectory_factory: TrajectoryFactory | None = None,
        config_source: Callable[[], SessionConfig] | None = None,
        pointer_source: Callable[[], PointerState] | None = None,
        symmetry: SymmetricRenderer | None = None,
    ) -> None:
        self.rasterizer = rasterizer
        self._config = (config or SessionConfig()).sanitized()
        self._palette: list[RGBA] = resolve_palette(palette)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._trajectory_factory = trajectory_factory or default_trajectory_factory()
        self._config_source = config_source
        self._pointer_source = pointer_source
        self._symmetry = symmetry or SymmetricRenderer()

        self._mode = DrawMode.POINTER
        self._paused = False
        self.pointer_drawer = PointerDrawer(self._palette, color_speed=self._config.color_rate)
        self.procedural_drawer: ProceduralDrawer | None = None
        self.frames = 0
        self.segments_drawn = 0

    # ---- 参照 -----------------------------------------------------------
    @property
    def mode(self) -> DrawMode:
        return self._mode

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def palette(self) -> tuple[RGBA, ...]:
        return tuple(self._palette)

    @property
    def active_drawer(self) -> Drawer:
        if self._mode is DrawMode.PROCEDURAL and self.procedural_drawer is not None:
            return self.procedural_drawer
        return self.pointer_drawer

    # ---- イベント -------------------------------------------------------
    def switch_to_pointer_mode(self) -> None:
        self._mode = DrawMode.POINTER
        logger.info("mode -> pointer")
        self.clear()

    def switch_to_procedural_mode(self) -> None:
        """新しい軌道で自動モードを開始する（前回の時刻/位相は破棄）。"""
        generator = self._trajectory_factory(self._config, self._rng)
        self.procedural_drawer = ProceduralDrawer(
            generator, self._palette, color_speed=self._config.color_rate
        )
        self._mode = DrawMode.PROCEDURAL
        logger.info("mode -> procedural (%d oscillators)", len(generator.oscillators))
        self.clear()

    def toggle_pause(self) -> bool:
        self._paused = not self._paused
        logger.info("auto draw %s", "paused" if self._paused else "resumed")
        return self._paused

    def clear(self) -> None:
        self.rasterizer.clear()

    def handle(self, event: SessionEvent) -> None:
        """離散イベントをディスパッチする。"""
        if event is SessionEvent.SWITCH_TO_POINTER:
            self.switch_to_pointer_mode()
        elif event is SessionEvent.SWITCH_TO_PROCEDURAL:
            self.switch_to_procedural_mode()
        elif event is SessionEvent.TOGGLE_PAUSE:
            self.toggle_pause()
        elif event is SessionEvent.CLEAR:
            self.clear()
        else:  # pragma: no cover - Enum 網羅
            raise ValueError(f"unknown session event: {event!r}")

    # ---- フレーム -------------------------------------------------------
    def update_config(self, config: SessionConfig) -> None:
        """次フレーム以降に使う設定スナップショットを差し替える。"""
        self._config = config.sanitized()

    def frame(self, pointer: PointerState | None = None) -> int:
        """1 フレーム分を処理し、描画した線分数を返す。"""
        cfg = self._config
        for drawer in (self.pointer_drawer, self.procedural_drawer):
            if drawer is not None:
                drawer.color_cycler.speed = cfg.color_rate

        frame = FrameInput(config=cfg, pointer=pointer or PointerState(), paused=self._paused)
        drawn = self.active_drawer.draw(frame, self._symmetry, self.rasterizer)
        self.frames += 1
        self.segments_drawn += drawn
        if drawn and logger.isEnabledFor(logging.DEBUG):
            logger.debug("frame %d: %d segments (%s)", self.frames, drawn, self._mode.value)
        return drawn

    def tick(self, dt: float) -> None:
        if self._config_source is not None:
            self.update_config(self._config_source())
        pointer = self._pointer_source() if self._pointer_source is not None else None
        self.frame(pointer)


__all__ = [
    "DrawMode",
    "DrawingSession",
    "SessionEvent",
    "TrajectoryFactory",
    "default_trajectory_factory",
]
