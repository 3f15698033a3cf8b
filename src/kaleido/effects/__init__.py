"""
どこで: `kaleido.effects` サブパッケージ。
何を: 線分に対する幾何エフェクト（回転対称/鏡映）を提供。
なぜ: 色や入力源から独立した純粋な幾何変換を 1 か所に集約するため。
"""

from .symmetry import MIN_SYMMETRY_ORDER, SymmetricRenderer, kaleidoscope, rotation_step_degrees

__all__ = ["MIN_SYMMETRY_ORDER", "SymmetricRenderer", "kaleidoscope", "rotation_step_degrees"]
