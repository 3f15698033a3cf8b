"""
どこで: `kaleido.engine` パッケージ。
何を: セッション/軌道/フレーム駆動（core）、GPU 描画（render）、操作系と HUD（ui）を束ねる。
なぜ: 計算と描画と UI の責務を分け、上位の `kaleido.api` から組み立てられるようにするため。
"""
