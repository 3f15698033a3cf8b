from __future__ import annotations

from pathlib import Path

import pytest

from kaleido.engine.core.config import SessionConfig
from kaleido.util.utils import config_section, load_config


@pytest.mark.integration
def test_load_config_reads_repository_defaults() -> None:
    cfg = load_config()
    session = SessionConfig.from_mapping(config_section(cfg, "session"))
    assert session.symmetry == 12
    assert len(cfg.get("palette", [])) == 6


@pytest.mark.integration
def test_root_config_overrides_top_level_sections(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "session:\n  symmetry: 12\nhud:\n  enabled: true\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("session:\n  symmetry: 5\n", encoding="utf-8")
    cfg = load_config(root=tmp_path)
    assert config_section(cfg, "session") == {"symmetry": 5}
    assert config_section(cfg, "hud") == {"enabled": True}


@pytest.mark.integration
def test_broken_yaml_falls_back_to_empty(tmp_path: Path) -> None:
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("session: [unclosed\n", encoding="utf-8")
    assert load_config(root=tmp_path) == {}
    assert config_section({"session": 3}, "session") == {}
