"""
どこで: `kaleido.api.sketch`（実行ランナー）。
何を: DrawingSession・StrokeRenderer・キーボードスライダ・HUD を pyglet ウィンドウ上で結線して実行する。
なぜ: 1 関数呼び出しで万華鏡アプリを起動でき、設定ファイル/CLI 引数/環境変数の優先順位を 1 か所で解決するため。

主エントリポイント:
- `run_kaleidoscope(*, canvas_size=None, fps=None, symmetry=None, mode=None, preset=None, ...)`

実行フロー（概要）:
1) 設定解決: `load_config()`（configs/default.yaml + config.yaml）と引数を統合して `SessionConfig` を作る。
   優先順位は「引数 > 設定ファイル > 組込み既定」。
2) `init_only=True` ならここで終了（pyglet/ModernGL を読み込まない）。
3) ウィンドウ/GL: `RenderWindow` を生成し、ModernGL のブレンドを有効化、`StrokeRenderer` を作る。
4) セッション: `ControlPanel`（スライダ）と `PointerTracker`（マウス）をスナップショット源として
   `DrawingSession` に注入する。
5) フレーム駆動: `FrameClock([session, renderer, hud])` を `pyglet.clock` で 1/fps ごとに呼ぶ。
6) 入力: マウス → PointerTracker、キー → `KEY_BINDINGS` に従いセッションイベント/スライダ操作。
   `ESC` でウィンドウを閉じ、GL リソースを解放する。

スレッド:
- すべて pyglet のメインスレッドで動く。イベントハンドラはフレーム tick の合間に呼ばれるため、
  モード切替がフレームの途中で起きることはない。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import numpy as np

from kaleido.common.settings import get as get_settings
from kaleido.engine.core.config import DEFAULT_CANVAS_SIZE, SessionConfig
from kaleido.engine.core.session import (
    DrawingSession,
    DrawMode,
    SessionEvent,
    default_trajectory_factory,
)
from kaleido.engine.core.trajectory import DEFAULT_PRESET, PRESETS
from kaleido.engine.ui.controls import Command, ControlPanel, KeyAction, Nudge
from kaleido.palette.color_types import normalize_color, to_u8_rgba
from kaleido.palette.cycler import resolve_palette
from kaleido.util.utils import config_section, load_config

logger = logging.getLogger(__name__)

DEFAULT_FPS = 60


def resolve_fps(requested_fps: int | None, canvas_cfg: dict[str, Any], *, default: int = DEFAULT_FPS) -> int:
    """FPS を解決して 1 以上の int を返す（引数 > 設定ファイル > 既定）。"""
    for candidate in (requested_fps, canvas_cfg.get("fps")):
        if candidate is None:
            continue
        try:
            return max(1, int(candidate))
        except (TypeError, ValueError):
            logger.warning("invalid fps %r; ignored", candidate)
    return max(1, int(default))


def resolve_canvas_size(canvas_size: int | tuple[int, int] | None, canvas_cfg: dict[str, Any]) -> tuple[int, int]:
    """キャンバス [px] を解決する。

    - int: 正方形の一辺
    - タプル: `(width, height)`（正であることを検証）
    - None: 設定ファイルの `canvas.size`、なければ既定値
    """
    value: Any = canvas_size if canvas_size is not None else canvas_cfg.get("size", DEFAULT_CANVAS_SIZE)
    try:
        if isinstance(value, (list, tuple)):
            w, h = int(value[0]), int(value[1])
        else:
            w = h = int(value)
    except (TypeError, ValueError, IndexError) as e:
        raise ValueError(f"invalid canvas_size: {value!r}") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"canvas_size must be positive, got: {(w, h)}")
    return w, h


def resolve_mode(mode: str | DrawMode | None, session_cfg: dict[str, Any]) -> DrawMode:
    raw = mode if mode is not None else session_cfg.get("initial_mode", DrawMode.POINTER.value)
    if isinstance(raw, DrawMode):
        return raw
    try:
        return DrawMode(str(raw).lower())
    except ValueError as e:
        allowed = ", ".join(m.value for m in DrawMode)
        raise ValueError(f"invalid mode: {raw}; allowed={allowed}") from e


def resolve_preset(preset: str | None, session_cfg: dict[str, Any]) -> str:
    key = str(preset if preset is not None else session_cfg.get("trajectory_preset", DEFAULT_PRESET))
    key = key.lower()
    if key not in PRESETS:
        allowed = ", ".join(sorted(PRESETS))
        raise ValueError(f"invalid trajectory preset: {key}; allowed={allowed}")
    return key


def apply_key_action(
    action: KeyAction,
    *,
    session: DrawingSession,
    controls: ControlPanel,
    on_command: Callable[[str], None] | None = None,
) -> str | None:
    """キー操作を適用し、HUD に出すメッセージ（なければ None）を返す。"""
    if isinstance(action, SessionEvent):
        session.handle(action)
        if action is SessionEvent.TOGGLE_PAUSE:
            return "Play Auto" if session.paused else "Pause Auto"
        if action is SessionEvent.CLEAR:
            return "Cleared"
        return f"Mode: {session.mode.value}"
    if isinstance(action, Nudge):
        controls.nudge(action.param, action.direction)
        return None
    if isinstance(action, Command):
        if on_command is not None:
            on_command(action.name)
        return None
    raise TypeError(f"unsupported key action: {action!r}")


def status_lines(
    session: DrawingSession, controls: ControlPanel, *, fps: float | None = None
) -> list[tuple[str, str]]:
    """HUD に表示する (ラベル, 値) 列。"""
    mode = session.mode.value
    if session.mode is DrawMode.PROCEDURAL and session.paused:
        mode += " (paused)"
    lines = [("Mode", mode), *controls.describe(), ("Segments", str(session.segments_drawn))]
    if fps is not None:
        lines.append(("FPS", f"{fps:.0f}"))
    return lines


def run_kaleidoscope(
    *,
    canvas_size: int | tuple[int, int] | None = None,
    fps: int | None = None,
    symmetry: int | None = None,
    mode: str | DrawMode | None = None,
    preset: str | None = None,
    palette: Sequence[object] | None = None,
    seed: int | None = None,
    show_hud: bool | None = None,
    init_only: bool = False,
) -> None:
    """万華鏡アプリを起動する。

    Parameters
    ----------
    canvas_size : int | tuple[int, int] | None
        キャンバス [px]。None で設定ファイル（`canvas.size`）。
    fps : int | None
        描画更新レート。None で設定ファイルから解決、未設定時は 60。
    symmetry : int | None
        初期の対称数。None で設定ファイル。
    mode : str | DrawMode | None
        初期モード（"pointer" / "procedural"）。
    preset : str | None
        自動描画の軌道プリセット（"single" / "quad"）。
    palette : Sequence[object] | None
        パレット（Hex / RGBA）。None で設定ファイル、空/不正なら既定パレット。
    seed : int | None
        軌道乱数のシード。None で環境変数 `KLD_SEED`、それも無ければ非決定的。
    show_hud : bool | None
        HUD 表示。None で設定ファイル（`hud.enabled`）。
    init_only : bool, default False
        True で設定解決だけ行い、ウィンドウを作らずに終了する。
    """
    # ---- ① 設定解決 ------------------------------------------------------
    cfg_all = load_config()
    canvas_cfg = config_section(cfg_all, "canvas")
    session_cfg = config_section(cfg_all, "session")
    hud_cfg = config_section(cfg_all, "hud")

    width, height = resolve_canvas_size(canvas_size, canvas_cfg)
    fps = resolve_fps(fps, canvas_cfg)
    config = SessionConfig.from_mapping({**session_cfg, "canvas_width": width, "canvas_height": height})
    if symmetry is not None:
        config = config.with_values(symmetry=int(symmetry))
    initial_mode = resolve_mode(mode, session_cfg)
    preset_name = resolve_preset(preset, session_cfg)
    palette_rgba = resolve_palette(palette if palette is not None else cfg_all.get("palette"))
    background = normalize_color(canvas_cfg.get("background_color", "#1e1e1e"))
    vinyl_color = normalize_color(canvas_cfg.get("vinyl_color", "#323232"))
    hud_enabled = bool(hud_cfg.get("enabled", True)) if show_hud is None else bool(show_hud)

    settings = get_settings()
    if seed is None:
        seed = settings.SEED

    logger.info(
        "kaleidoscope %dx%d fps=%d symmetry=%d mode=%s preset=%s seed=%s",
        width,
        height,
        fps,
        config.symmetry,
        initial_mode.value,
        preset_name,
        seed,
    )
    if init_only:
        return None

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet
    from pyglet.window import key

    from kaleido.engine.core.frame_clock import FrameClock
    from kaleido.engine.core.render_window import RenderWindow
    from kaleido.engine.render.renderer import StrokeRenderer
    from kaleido.engine.ui.controls import KEY_BINDINGS, PointerTracker
    from kaleido.engine.ui.overlay import OverlayHUD

    # ---- ② Window & ModernGL -----------------------------------------------
    window = RenderWindow(width, height, bg_color=background, samples=0)
    logger.debug("framebuffer scale %.2f", window.framebuffer_scale)
    mgl_ctx = moderngl.create_context()
    mgl_ctx.enable(moderngl.BLEND)
    mgl_ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    renderer = StrokeRenderer(
        mgl_ctx,
        (width, height),
        clip_radius=config.draw_radius,
        framebuffer_size=window.get_framebuffer_size(),
        background=background,
        vinyl_color=vinyl_color,
        samples=settings.MSAA_SAMPLES,
    )

    # ---- ③ Session ---------------------------------------------------------
    session: DrawingSession | None = None

    def _on_vinyl_change(radius: float) -> None:
        # ビニール径の変更は描画半径を更新してクリア
        renderer.set_clip_radius(radius)
        if session is not None:
            session.clear()

    controls = ControlPanel(config, on_vinyl_change=_on_vinyl_change)
    pointer = PointerTracker(flip_height=height)
    session = DrawingSession(
        renderer,
        config=config,
        palette=palette_rgba,
        rng=np.random.default_rng(seed),
        trajectory_factory=default_trajectory_factory(preset_name),
        config_source=controls.snapshot,
        pointer_source=pointer.snapshot,
    )
    if initial_mode is DrawMode.PROCEDURAL:
        session.switch_to_procedural_mode()

    # ---- ④ HUD -------------------------------------------------------------
    overlay = OverlayHUD(
        window,
        lambda: status_lines(session, controls, fps=frame_clock.fps),
        font_size=int(hud_cfg.get("font_size", 10)),
        color=to_u8_rgba(hud_cfg.get("text_color", (230, 230, 230, 200))),
    )
    overlay.enabled = hud_enabled

    window.add_draw_callback(renderer.draw)
    window.add_draw_callback(overlay.draw)

    # ---- ⑤ FrameClock ------------------------------------------------------
    frame_clock = FrameClock([session, renderer, overlay])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    def _on_command(name: str) -> None:
        if name == "toggle_hud":
            overlay.toggle()

    # ---- ⑥ pyglet イベント ---------------------------------------------------
    @window.event
    def on_mouse_press(x, y, button, modifiers):  # noqa: ANN001
        pointer.on_press(x, y)

    @window.event
    def on_mouse_drag(x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        pointer.on_drag(x, y)

    @window.event
    def on_mouse_release(x, y, button, modifiers):  # noqa: ANN001
        pointer.on_release(x, y)

    @window.event
    def on_mouse_motion(x, y, dx, dy):  # noqa: ANN001
        pointer.on_motion(x, y)

    @window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            window.close()
            return
        action = KEY_BINDINGS.get(key.symbol_string(sym))
        if action is None:
            return
        message = apply_key_action(action, session=session, controls=controls, on_command=_on_command)
        if message:
            overlay.show_message(message)

    @window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        pyglet.clock.unschedule(frame_clock.tick)
        try:
            renderer.release()
        except Exception as e:
            logger.debug("renderer release failed: %s", e, exc_info=True)
        setattr(on_close, "_closed", True)
        logger.info("closed after %d frames", frame_clock.frame_count)
        pyglet.app.exit()

    pyglet.app.run()


__all__ = [
    "run_kaleidoscope",
    "apply_key_action",
    "status_lines",
    "resolve_canvas_size",
    "resolve_fps",
    "resolve_mode",
    "resolve_preset",
]
