"""
どこで: `kaleido.engine.render` の低レベルメッシュ層。
何を: VBO/VAO の確保・更新・解放を担当し、ストローク（線分）と塗り（円盤）のメッシュを管理。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

# 1 頂点 = x, y, r, g, b, a, width
STROKE_VERTEX_FORMAT = "2f 4f 1f"
STROKE_ATTRIBUTES = ("in_vert", "in_color", "in_width")
STROKE_VERTEX_FLOATS = 7


class LineMesh:
    """
    GPUに線分の頂点データを送り込む作業を管理（インデックスなしの LINES）
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 1MB）。必要に応じて自動拡張。
        initial_reserve: int = 1024 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: ストローク用シェーダープログラム
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program, [(self.vbo, STROKE_VERTEX_FORMAT, *STROKE_ATTRIBUTES)]
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        if vbo_size <= self.vbo.size:
            return
        self.vbo.release()
        self.vao.release()
        self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
        # VAO は VBO が差し替わるたびに張り直す
        self.vao = self._build_vao()

    def upload(self, vertices: np.ndarray) -> None:
        """実際にデータをGPUへ送り込む"""
        self._ensure_capacity(vertices.nbytes)
        self.vbo.orphan()
        self.vbo.write(vertices.tobytes())
        self.vertex_count = int(vertices.shape[0])

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.vao.release()


class DiscMesh:
    """ビニール円盤（TRIANGLE_FAN）の静的メッシュ。半径変更時に作り直す。"""

    def __init__(self, ctx: Any, program: Any, vertices: np.ndarray):
        self.ctx = ctx
        self.program = program
        self.vbo = ctx.buffer(vertices.astype(np.float32).tobytes())
        self.vao = ctx.simple_vertex_array(program, self.vbo, "in_vert")
        self.vertex_count = int(vertices.shape[0])

    def release(self) -> None:
        self.vbo.release()
        self.vao.release()


__all__ = ["LineMesh", "DiscMesh", "STROKE_VERTEX_FLOATS"]
