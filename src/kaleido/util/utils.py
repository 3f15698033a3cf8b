"""
どこで: `kaleido.util.utils`
何を: YAML 構成（`configs/default.yaml` にルートの `config.yaml` を重ねる）の読み込み。
なぜ: キャンバス/セッション/パレット/HUD の既定値をコードの外で変えられるようにするため。

読めない/壊れたファイルは警告を出して無視する（起動は止めない）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator

import yaml

logger = logging.getLogger(__name__)

# 後ろほど優先（トップレベルのキー単位で上書き）
CONFIG_FILES = ("configs/default.yaml", "config.yaml")

_ROOT_MARKERS = ("pyproject.toml", "configs", ".git")


def _read_yaml_mapping(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring config %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level must be a mapping", path)
        return {}
    return data


def project_root(start: Path | None = None) -> Path:
    """`start`（既定: このファイル）から上へ辿り、マーカーのある最初のディレクトリを返す。"""
    here = (start or Path(__file__)).resolve()
    for candidate in (here, *here.parents):
        if any((candidate / m).exists() for m in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def _existing_config_files(root: Path) -> Iterator[Path]:
    for rel in CONFIG_FILES:
        path = root / rel
        if path.is_file():
            yield path


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """構成を辞書で返す。ファイルが 1 つも無ければ空辞書。"""
    base = root if root is not None else project_root()
    merged: Dict[str, Any] = {}
    for path in _existing_config_files(base):
        section = _read_yaml_mapping(path)
        if section:
            logger.debug("config %s: %s", path, sorted(section))
        merged.update(section)
    return merged


def config_section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """トップレベルのセクションを返す（欠落/辞書以外は空辞書）。"""
    section = cfg.get(name) if isinstance(cfg, dict) else None
    return section if isinstance(section, dict) else {}


__all__ = ["load_config", "config_section", "project_root", "CONFIG_FILES"]
