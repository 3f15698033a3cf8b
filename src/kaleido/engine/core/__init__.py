"""
どこで: `kaleido.engine.core` サブパッケージ。
何を: 軌道生成・Drawer・DrawingSession・設定スナップショット・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: 描画基盤（GPU/ウィンドウ）に依存しない中核ロジックを上位層から再利用可能にするため。
"""
