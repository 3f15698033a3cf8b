"""
どこで: `kaleido.engine.render` の高レベル描画。
何を: セッションから受け取った線分を溜め、毎フレーム ModernGL で永続キャンバス（オフスクリーン FBO）へ描き足す。
なぜ: 万華鏡の線は消さずに蓄積するため、1 フレーム分の新しい線分だけを GPU に送り、画面へは FBO を転送する。

責務:
- `draw_segments()`: 中心基準の線分（色/太さ付き）を保留キューへ積む（`Rasterizer` プロトコル）。
- `clear()`: 次の tick で背景（灰 30）とビニール円盤（灰 50）を描き直す。
- `tick()`: クリア → 保留線分のアップロードと描画（円形クリップはフラグメントシェーダ）。
- `draw()`: FBO を画面へブリット（`on_draw` から呼ぶ）。
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import moderngl as mgl
import numpy as np

from kaleido.common.types import RGBA
from kaleido.palette.color_types import normalize_color

from ..core.tickable import Tickable
from .line_mesh import STROKE_VERTEX_FLOATS

DEFAULT_BACKGROUND: RGBA = (30 / 255.0, 30 / 255.0, 30 / 255.0, 1.0)
DEFAULT_VINYL_COLOR: RGBA = (50 / 255.0, 50 / 255.0, 50 / 255.0, 1.0)
DISC_RESOLUTION = 180


class StrokeRenderer(Tickable):
    """
    線分を永続キャンバスへ描き足すラスタライザ。
    セッション（CPU 側）と GPU の間で、フレーム境界をまたがない転送を保証する。
    """

    def __init__(
        self,
        mgl_context: Any,
        canvas_size: tuple[int, int],
        *,
        clip_radius: float,
        framebuffer_size: tuple[int, int] | None = None,
        background: object = DEFAULT_BACKGROUND,
        vinyl_color: object = DEFAULT_VINYL_COLOR,
        samples: int = 4,
    ):
        """
        canvas_size: 論理キャンバスサイズ [px]（座標系の基準）
        framebuffer_size: 実フレームバッファサイズ（HiDPI では canvas_size より大きい）
        clip_radius: 描画領域（ビニール円盤）の半径 [px]
        """
        self.ctx = mgl_context
        self._logger = logging.getLogger(__name__)

        # shader/mesh モジュールだけを遅延 import（moderngl 自体はモジュール先頭で import 済み）
        from .line_mesh import DiscMesh, LineMesh  # local import
        from .shader import Shader  # local import

        width, height = int(canvas_size[0]), int(canvas_size[1])
        fb_size = framebuffer_size or (width, height)
        half_size = (width / 2.0, height / 2.0)

        self.stroke_program = Shader.create_stroke_shader(mgl_context)
        self.stroke_program["half_size"].value = half_size
        self.fill_program = Shader.create_fill_shader(mgl_context)
        self.fill_program["half_size"].value = half_size

        self.gpu = LineMesh(ctx=mgl_context, program=self.stroke_program)
        self.canvas = mgl_context.simple_framebuffer(
            (int(fb_size[0]), int(fb_size[1])), samples=max(0, int(samples))
        )
        self._disc_factory = lambda r: DiscMesh(mgl_context, self.fill_program, disc_vertices(r))
        self._disc = self._disc_factory(clip_radius)

        self._init_state(clip_radius, background, vinyl_color)
        self.stroke_program["clip_radius"].value = float(clip_radius)

    def _init_state(self, clip_radius: float, background: object, vinyl_color: object) -> None:
        """GPU に依存しない状態を初期化する。"""
        self._background = normalize_color(background)
        self._vinyl_color = normalize_color(vinyl_color)
        self._clip_radius = float(clip_radius)
        self._radius_dirty = False
        self._pending: list[np.ndarray] = []
        # 初回 tick で背景を描く
        self._needs_clear = True
        # HUD 連携用
        self._last_segment_count = 0
        self._total_segments = 0

    # --------------------------------------------------------------------- #
    # Rasterizer                                                            #
    # --------------------------------------------------------------------- #
    def draw_segments(self, segments: np.ndarray, color: RGBA, weight: float) -> None:
        """線分（形状 (K, 2, 2)）を保留キューへ積む。描画は次の tick で行う。"""
        verts = segments_to_vertices(segments, color, weight)
        if verts.shape[0]:
            self._pending.append(verts)

    def clear(self) -> None:
        """保留中の線分を破棄し、次の tick でキャンバスを初期化する。"""
        self._pending.clear()
        self._needs_clear = True

    # --------------------------------------------------------------------- #
    # Tickable                                                              #
    # --------------------------------------------------------------------- #
    def tick(self, dt: float) -> None:
        """毎フレーム呼ばれ、クリア要求と保留線分を FBO へ反映する。"""
        if self._radius_dirty:
            self._apply_clip_radius()
        if self._needs_clear:
            self._clear_canvas()
        if self._pending:
            self._flush_pending()
        else:
            self._last_segment_count = 0

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def draw(self) -> None:
        """FBO の内容を画面へ転送する。"""
        screen = self.ctx.screen
        screen.use()
        self.ctx.copy_framebuffer(screen, self.canvas)

    def set_clip_radius(self, radius: float) -> None:
        """クリップ半径とビニール円盤の半径を更新する（次の tick で反映）。"""
        r = float(radius)
        if r <= 0.0:
            raise ValueError(f"clip radius must be > 0, got {radius}")
        if math.isclose(r, self._clip_radius):
            return
        self._clip_radius = r
        self._radius_dirty = True

    @property
    def clip_radius(self) -> float:
        return self._clip_radius

    def release(self) -> None:
        """GPU リソースを解放。"""
        self.gpu.release()
        self._disc.release()
        self.canvas.release()

    # HUD 用: 直近フレーム/累計の線分数
    def get_counts(self) -> tuple[int, int]:
        return int(self._last_segment_count), int(self._total_segments)

    # --------------------------------------------------------------------- #
    # Internal helpers                                                      #
    # --------------------------------------------------------------------- #
    def _apply_clip_radius(self) -> None:
        self.stroke_program["clip_radius"].value = self._clip_radius
        self._disc.release()
        self._disc = self._disc_factory(self._clip_radius)
        self._radius_dirty = False

    def _clear_canvas(self) -> None:
        """背景色で塗りつぶし、ビニール円盤を描く。"""
        self.canvas.use()
        self.canvas.clear(*self._background)
        self.fill_program["color"].value = self._vinyl_color
        self._disc.vao.render(mgl.TRIANGLE_FAN)
        self._needs_clear = False
        self._total_segments = 0

    def _flush_pending(self) -> None:
        """保留線分を 1 つの VBO に統合して描画する。"""
        verts = np.concatenate(self._pending, axis=0)
        self._pending = []
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Uploading strokes: verts=%d (%.1f KB)", len(verts), verts.nbytes / 1024.0
            )
        self.canvas.use()
        self.gpu.upload(verts)
        if self.gpu.vertex_count > 0:
            self.gpu.vao.render(mgl.LINES, vertices=self.gpu.vertex_count)
        count = int(verts.shape[0]) // 2
        self._last_segment_count = count
        self._total_segments += count


# ---------- utility -------------------------------------------------------- #
def segments_to_vertices(segments: np.ndarray, color: Sequence[float], weight: float) -> np.ndarray:
    """
    線分 (K, 2, 2) を頂点配列 (2K, 7) float32 へ変換する。
    列は x, y, r, g, b, a, width。色と太さは全頂点で共通。"""
    seg = np.asarray(segments, dtype=np.float32)
    if seg.size == 0:
        return np.empty((0, STROKE_VERTEX_FLOATS), dtype=np.float32)
    if seg.ndim != 3 or seg.shape[1:] != (2, 2):
        raise ValueError(f"segments must have shape (K, 2, 2), got {seg.shape}")
    points = seg.reshape(-1, 2)
    out = np.empty((points.shape[0], STROKE_VERTEX_FLOATS), dtype=np.float32)
    out[:, 0:2] = points
    out[:, 2:6] = np.asarray(color, dtype=np.float32)[:4]
    out[:, 6] = np.float32(weight)
    return out


def disc_vertices(radius: float, resolution: int = DISC_RESOLUTION) -> np.ndarray:
    """中心 + 円周（閉じた）からなる TRIANGLE_FAN 用頂点 (resolution+2, 2) を返す。"""
    theta = np.linspace(0.0, 2.0 * np.pi, int(resolution) + 1, dtype=np.float64)
    ring = np.stack([np.cos(theta), np.sin(theta)], axis=-1) * float(radius)
    return np.vstack([np.zeros((1, 2)), ring]).astype(np.float32)


__all__ = ["StrokeRenderer", "segments_to_vertices", "disc_vertices"]
