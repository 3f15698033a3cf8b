"""
どこで: `kaleido.common.env`
何を: `KLD_*` 環境変数を型付きで読む小関数（int/bool/str）。
なぜ: 設定（`common.settings`）が値の解釈だけに集中できるよう、未設定/空文字/不正値の扱いをここで統一する。

いずれの関数も例外を投げず、解釈できない値は既定値に戻す。
"""

from __future__ import annotations

import os
from typing import Optional

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def _raw(name: str) -> Optional[str]:
    # 空白だけの値は未設定として扱う
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def env_int(name: str, default: Optional[int] = None, *, min_value: Optional[int] = None) -> Optional[int]:
    """整数として読む。`min_value` を下回る値は下限へ寄せる。"""
    raw = _raw(name)
    if raw is None:
        return default
    try:
        out = int(raw)
    except ValueError:
        return default
    return out if min_value is None else max(min_value, out)


def env_bool(name: str, default: bool = False) -> bool:
    """真偽値として読む（1/0, true/false, yes/no, on/off）。それ以外の整数は非 0 を真とする。"""
    raw = _raw(name)
    if raw is None:
        return bool(default)
    key = raw.lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    try:
        return int(key) != 0
    except ValueError:
        return bool(default)


def env_str(name: str, default: str) -> str:
    raw = _raw(name)
    return default if raw is None else raw


__all__ = ["env_int", "env_bool", "env_str"]
