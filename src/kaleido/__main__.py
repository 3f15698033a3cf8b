"""
どこで: `python -m kaleido` のエントリポイント。
何を: CLI 引数を解釈し、ロギングを初期化して `run_kaleidoscope` を起動する。
"""

from __future__ import annotations

import argparse
from typing import Sequence

from kaleido.common.logging import setup_default_logging
from kaleido.common.settings import get as get_settings
from kaleido.engine.core.session import DrawMode
from kaleido.engine.core.trajectory import PRESETS


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kaleido", description="Kaleidoscope drawing on a vinyl canvas")
    p.add_argument("--size", type=int, default=None, help="canvas size in pixels (square)")
    p.add_argument("--fps", type=int, default=None, help="frame rate")
    p.add_argument("--symmetry", type=int, default=None, help="initial symmetry order (2..32)")
    p.add_argument("--mode", choices=[m.value for m in DrawMode], default=None, help="initial draw mode")
    p.add_argument("--preset", choices=sorted(PRESETS), default=None, help="procedural trajectory preset")
    p.add_argument("--seed", type=int, default=None, help="random seed for procedural trajectories")
    p.add_argument("--no-hud", action="store_true", help="start with the HUD hidden")
    p.add_argument("--log-level", default=None, help="logging level (DEBUG/INFO/WARNING/...)")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level or get_settings().LOG_LEVEL)

    from kaleido.api.sketch import run_kaleidoscope

    run_kaleidoscope(
        canvas_size=args.size,
        fps=args.fps,
        symmetry=args.symmetry,
        mode=args.mode,
        preset=args.preset,
        seed=args.seed,
        show_hud=False if args.no_hud else None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
