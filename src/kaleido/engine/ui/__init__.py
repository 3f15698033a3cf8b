"""
どこで: `kaleido.engine.ui` サブパッケージ。
何を: キーボードスライダ/ポインタ追跡（controls）と HUD（overlay）。
なぜ: 入力イベントと表示を中核ロジックから分離するため（overlay のみ pyglet に依存）。
"""
