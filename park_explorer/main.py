"""Command line entry point: replay a recorded fix file."""

from __future__ import annotations

from typing import Optional, Sequence

from .tools.replay_fixes import main as _replay_main


def main(argv: Optional[Sequence[str]] = None) -> int:
    return _replay_main(argv)
