"""Replay a recorded fix file through the exploration tracker.

Usage:
    python -m park_explorer.tools.replay_fixes walk.gpx --state-file milestones.json
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config import MILESTONE_STATE_FILE, TILE_SIZE_DEG
from ..errors import FixFormatError, RegionConfigError
from ..fix_io import load_fixes, supported_suffixes
from ..services import ExplorationService, ExplorationServiceConfig
from ..storage import InMemoryMilestoneStore, JsonFileMilestoneStore, MilestoneStore
from ..tracking.events import CoverageUpdated, MilestoneReached, TileExplored, TrackerEvent

LOGGER = logging.getLogger("replay_fixes")


@dataclass(slots=True)
class ReplaySummary:
    """Totals gathered while replaying a fix file."""

    fixes: int = 0
    new_tiles: int = 0
    percent: Optional[float] = None
    milestones: List[int] = field(default_factory=list)


def replay_fixes(path: Path, service: ExplorationService) -> ReplaySummary:
    """Feed every fix in ``path`` to ``service`` and summarise the events."""

    summary = ReplaySummary()
    for fix in load_fixes(path):
        summary.fixes += 1
        for event in service.observe(fix):
            _record(summary, event)
    return summary


def _record(summary: ReplaySummary, event: TrackerEvent) -> None:
    if isinstance(event, TileExplored):
        summary.new_tiles += 1
    elif isinstance(event, CoverageUpdated):
        summary.percent = event.percent
    elif isinstance(event, MilestoneReached):
        summary.milestones.append(event.threshold)
        LOGGER.info("MILESTONE %d%%: %s", event.threshold, event.message)


def _store_factory(args: argparse.Namespace) -> Callable[[], MilestoneStore]:
    if args.no_state:
        return InMemoryMilestoneStore
    state_file = args.state_file
    return lambda: JsonFileMilestoneStore(state_file)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay recorded GPS fixes and report park coverage."
    )
    parser.add_argument(
        "fixes_file",
        type=Path,
        help=f"Recorded fixes ({', '.join(supported_suffixes())})",
    )
    parser.add_argument(
        "--state-file",
        default=MILESTONE_STATE_FILE,
        help="JSON file holding fired milestones between runs",
    )
    parser.add_argument(
        "--no-state",
        action="store_true",
        help="Keep fired milestones in memory only",
    )
    parser.add_argument(
        "--tile-size",
        type=float,
        default=TILE_SIZE_DEG,
        help="Tile width in decimal degrees",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the replay_fixes tool."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )

    try:
        service = ExplorationService(
            ExplorationServiceConfig(
                tile_size=args.tile_size, store_factory=_store_factory(args)
            )
        )
    except (RegionConfigError, ValueError) as exc:
        LOGGER.error("Invalid tracker configuration: %s", exc)
        return 2

    try:
        summary = replay_fixes(args.fixes_file, service)
    except (FixFormatError, OSError) as exc:
        LOGGER.error("Failed to load fixes '%s': %s", args.fixes_file, exc)
        return 1

    snapshot = service.snapshot()
    percent_text = "n/a" if snapshot.percent is None else f"{snapshot.percent:.0f}%"
    LOGGER.info(
        "Replayed %d fixes: %d new tiles, explored %s/%s tiles (%s), milestones this run=%s",
        summary.fixes,
        summary.new_tiles,
        snapshot.explored_tiles,
        snapshot.total_tiles,
        percent_text,
        summary.milestones,
    )
    earned = [badge.label for badge in service.badges() if badge.earned]
    LOGGER.info("Badges earned: %s", ", ".join(earned) if earned else "none")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
