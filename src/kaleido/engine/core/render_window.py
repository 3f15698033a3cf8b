"""
どこで: `kaleido.engine.core.render_window`
何を: pyglet ウィンドウ。`on_draw` で背景を塗り、登録順に描画コールバックを呼ぶ。
なぜ: ModernGL の FBO 転送と HUD を、ウィンドウ側の事情（GL Config/HiDPI）から切り離して登録できるようにするため。

補足:
- 線のアンチエイリアスはレンダラのオフスクリーン FBO が担うため、通常は `samples=0` で作る。
- `framebuffer_scale` は HiDPI での実画素 / 論理画素の比。
"""

from __future__ import annotations

from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

DrawCallback = Callable[[], None]


def _gl_config(samples: int) -> Config:
    if samples > 0:
        return Config(double_buffer=True, sample_buffers=1, samples=int(samples), vsync=True)
    return Config(double_buffer=True, vsync=True)


class RenderWindow(pyglet.window.Window):
    """固定サイズの描画ウィンドウ。

    引数:
        width, height: 論理サイズ [px]。
        bg_color: `on_draw` 冒頭で塗る RGBA（0..1）。
        caption: タイトル。
        samples: ウィンドウ側 MSAA のサンプル数（0 で無効）。
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
        caption: str = "Kaleido",
        samples: int = 0,
    ):
        super().__init__(
            width=width, height=height, caption=caption, resizable=False, config=_gl_config(samples)
        )
        self._bg_color = tuple(bg_color)
        self._callbacks: list[DrawCallback] = []

    @property
    def framebuffer_scale(self) -> float:
        fb_w, _ = self.get_framebuffer_size()
        return fb_w / float(self.width) if self.width else 1.0

    def add_draw_callback(self, func: DrawCallback) -> None:
        """`on_draw` で呼ぶ描画関数を追加する（登録順 = 重ね順）。"""
        self._callbacks.append(func)

    def on_draw(self):
        glClearColor(*self._bg_color)
        self.clear()
        for cb in self._callbacks:
            cb()
