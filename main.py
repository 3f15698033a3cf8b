from __future__ import annotations

from kaleido.api import run

CANVAS_SIZE = 1000


if __name__ == "__main__":
    run(canvas_size=CANVAS_SIZE, symmetry=12, mode="pointer")
