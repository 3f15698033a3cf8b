"""
どこで: `kaleido` パッケージ（トップレベル）。
何を: ポインタ/自動軌道の線分を回転・鏡映で複製し、ビニール盤状の円形キャンバスへ
      色を循環させながら描き重ねる万華鏡ドローイング。
なぜ: 描画ロジック（session/drawer/symmetry）と GPU 描画（render）と入力（ui）を分離して組み合わせるため。
"""

__version__ = "0.1.0"
