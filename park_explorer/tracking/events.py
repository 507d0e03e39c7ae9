"""Events emitted by the tracker for rendering and notification surfaces."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Iterable, Sequence, Union

from ..geometry.models import GeoPoint, TileKey


@dataclass(frozen=True, slots=True)
class TileExplored:
    """A tile was covered for the first time."""

    tile_key: TileKey
    center: GeoPoint


@dataclass(frozen=True, slots=True)
class CoverageUpdated:
    """Coverage changed; ``percent`` is in the range 0..100."""

    percent: float


@dataclass(frozen=True, slots=True)
class MilestoneReached:
    """A coverage threshold was crossed for the first time ever."""

    threshold: int
    message: str


TrackerEvent = Union[TileExplored, CoverageUpdated, MilestoneReached]
EventListener = Callable[[TrackerEvent], None]


def dispatch_events(
    listeners: Iterable[EventListener],
    events: Sequence[TrackerEvent],
    logger: logging.Logger,
) -> None:
    """Deliver ``events`` in order to every listener; failures are logged only."""

    listeners = list(listeners)
    for event in events:
        for listener in listeners:
            try:
                listener(event)
            except Exception as exc:
                logger.warning(
                    "Event listener failed event=%s: %s",
                    type(event).__name__,
                    exc,
                )
