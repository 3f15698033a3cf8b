"""
どこで: `kaleido.common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, env_str


@dataclass
class _Settings:
    # ロギング
    LOG_LEVEL: str = "INFO"

    # 乱数（None で毎回異なる軌道）
    SEED: int | None = None

    # Renderer
    MSAA_SAMPLES: int = 4


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - int は `env_int`、str は `env_str` を使用。
    - MSAA は下限 0 に丸める。
    """
    _settings.LOG_LEVEL = env_str("KLD_LOG_LEVEL", "INFO").upper()
    _settings.SEED = env_int("KLD_SEED", None)
    _settings.MSAA_SAMPLES = env_int("KLD_MSAA_SAMPLES", 4, min_value=0) or 0


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
