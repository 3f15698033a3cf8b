"""
どこで: `kaleido.util` サブパッケージ。
何を: 構成ファイルの読み込みなど、アプリ層の小ヘルパ。
なぜ: engine/core に I/O を持ち込まないため。
"""
