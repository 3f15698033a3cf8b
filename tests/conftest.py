"""共通フィクスチャ。

- 乱数シード固定
- 描画呼び出しを記録するだけのラスタライザ
"""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


class RecordingRasterizer:
    """`Rasterizer` プロトコルを満たし、呼び出しを記録する。"""

    def __init__(self) -> None:
        self.calls: list[tuple[np.ndarray, tuple[float, float, float, float], float]] = []
        self.clears = 0

    def draw_segments(self, segments, color, weight) -> None:  # noqa: ANN001
        self.calls.append((np.asarray(segments).copy(), tuple(color), float(weight)))

    def clear(self) -> None:
        self.clears += 1


@pytest.fixture()
def rasterizer() -> RecordingRasterizer:
    return RecordingRasterizer()
