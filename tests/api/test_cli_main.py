from __future__ import annotations

import pytest

from kaleido.__main__ import build_parser


def test_cli_parses_options() -> None:
    args = build_parser().parse_args(
        ["--size", "800", "--symmetry", "8", "--mode", "procedural", "--preset", "quad", "--no-hud"]
    )
    assert args.size == 800
    assert args.symmetry == 8
    assert args.mode == "procedural"
    assert args.preset == "quad"
    assert args.no_hud is True
    assert args.seed is None


def test_cli_rejects_unknown_mode() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--mode", "spiral"])
