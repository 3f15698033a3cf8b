"""
どこで: `kaleido.engine.core.tickable`
何を: FrameClock から毎フレーム呼ばれる側のインターフェース。
なぜ: セッション/レンダラ/HUD が共通の基底クラスを持たずに、構造的部分型で同列に並べられるようにするため。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Tickable(Protocol):
    def tick(self, dt: float) -> None:
        """前回呼び出しから `dt` 秒経過したものとして 1 フレーム進める。"""
