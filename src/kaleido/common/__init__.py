"""
どこで: `kaleido.common` サブパッケージ。
何を: 型エイリアス・環境設定・ロギング・オシレータなど、依存の少ない共通部品を提供。
なぜ: engine/effects/palette から循環なく参照できる最下層を用意するため。
"""
