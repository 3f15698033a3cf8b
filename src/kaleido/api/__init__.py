"""
どこで: `kaleido.api` 入口（高レベル公開 API）。
何を: `run_kaleidoscope` とキー操作ヘルパを再輸出。
なぜ: 利用者が単一名前空間から起動まで完結できるようにするため。

Usage:
    from kaleido.api import run

    run(canvas_size=800, symmetry=8, mode="procedural")
"""

from .sketch import apply_key_action, status_lines
from .sketch import run_kaleidoscope as run
from .sketch import run_kaleidoscope as run_kaleidoscope

__all__ = [
    "run",
    "run_kaleidoscope",
    "apply_key_action",
    "status_lines",
]
