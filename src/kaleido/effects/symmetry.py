"""
万華鏡エフェクト（回転対称 + 鏡映）

- 1 本の線分（中心基準座標）を `symmetry_order` 個の回転コピーへ複製し、各コピーの鏡映（y 反転）を加える。
- 出力は `(2n, 2, 2)` の ndarray。行 `2i` が `i * 360/n` 度の回転コピー、行 `2i+1` がその鏡映。
- 各コピーは入力から独立に回転する（前回の回転結果へ積み重ねない）。
- 色/太さは扱わない純関数。呼び出し側（Drawer）が決める。

パラメータ:
- segment: ((x0, y0), (x1, y1))。
- symmetry_order: 回転コピー数（>= 2）。
"""

from __future__ import annotations

import numpy as np

from kaleido.common.types import Segment

MIN_SYMMETRY_ORDER: int = 2

PARAM_META = {
    "symmetry_order": {"type": "int", "min": MIN_SYMMETRY_ORDER, "max": 32, "step": 1},
}


def rotation_step_degrees(symmetry_order: int) -> float:
    """1 コピーあたりの回転角 [deg] を返す。"""
    return 360.0 / float(symmetry_order)


def _rotation_matrices(symmetry_order: int) -> np.ndarray:
    # (n, 2, 2): i 番目は i * step [deg] の回転
    step = rotation_step_degrees(symmetry_order)
    angles = np.deg2rad(np.arange(symmetry_order, dtype=np.float64) * step)
    c = np.cos(angles)
    s = np.sin(angles)
    return np.stack([np.stack([c, -s], axis=-1), np.stack([s, c], axis=-1)], axis=1)


def kaleidoscope(segment: Segment | np.ndarray, symmetry_order: int) -> np.ndarray:
    """線分を回転対称 + 鏡映に展開する。

    Parameters
    ----------
    segment : Segment | np.ndarray
        始点と終点（形状 (2, 2)）。
    symmetry_order : int
        回転コピー数。2 未満は `ValueError`（設定層で事前にクランプされる前提）。

    Returns
    -------
    np.ndarray
        形状 `(2 * symmetry_order, 2, 2)` の float64 配列。
    """
    n = int(symmetry_order)
    if n < MIN_SYMMETRY_ORDER:
        raise ValueError(f"symmetry_order must be >= {MIN_SYMMETRY_ORDER}, got {symmetry_order}")
    seg = np.asarray(segment, dtype=np.float64)
    if seg.shape != (2, 2):
        raise ValueError(f"segment must have shape (2, 2), got {seg.shape}")

    # (n, 2, 2) @ (2, 2).T -> 各コピーの端点 (n, 2 端点, 2 成分)
    rotated = np.einsum("nij,pj->npi", _rotation_matrices(n), seg)
    mirrored = rotated.copy()
    mirrored[:, :, 1] = -mirrored[:, :, 1]

    out = np.empty((2 * n, 2, 2), dtype=np.float64)
    out[0::2] = rotated
    out[1::2] = mirrored
    return out


class SymmetricRenderer:
    """`kaleidoscope` を呼び出すだけの薄いラッパ（Drawer から注入して差し替え可能にする）。"""

    def emit(self, segment: Segment | np.ndarray, symmetry_order: int) -> np.ndarray:
        return kaleidoscope(segment, symmetry_order)


kaleidoscope.__param_meta__ = PARAM_META


__all__ = [
    "MIN_SYMMETRY_ORDER",
    "SymmetricRenderer",
    "kaleidoscope",
    "rotation_step_degrees",
]
