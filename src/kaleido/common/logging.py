"""
どこで: `kaleido.common.logging`
何を: CLI/ランナー用のロギング初期化。各モジュールは `logging.getLogger(__name__)` だけを使う。
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# 描画ループ中に大量の DEBUG を出す外部ロガー
_CHATTY = ("pyglet",)


def resolve_level(level: int | str | None) -> int:
    """"debug" や 10 のような指定を数値レベルにする。不明な名前と None は INFO。"""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).strip().upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_default_logging(level: int | str | None = "INFO") -> None:
    """ルートロガーが未設定のときだけ basicConfig を適用する（二重設定はしない）。"""
    root = logging.getLogger()
    if root.handlers:
        return
    lvl = resolve_level(level)
    logging.basicConfig(level=lvl, format=_FORMAT)
    # kaleido の DEBUG を見たいときでも外部ライブラリは INFO に留める
    for name in _CHATTY:
        logging.getLogger(name).setLevel(max(lvl, logging.INFO))


__all__ = ["setup_default_logging", "resolve_level"]
