"""Exploration service.

Wires the region, grid, milestone store and tracker together from
configuration and serialises fix delivery so hosts with several location
callbacks can share one tracker safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..config import (
    CENTRAL_PARK_BOUNDARY,
    MILESTONE_SAVE_ATTEMPTS,
    MILESTONE_STATE_FILE,
    MILESTONE_THRESHOLDS,
    PRECOMPUTE_REGION_TOTAL,
    TILE_SIZE_DEG,
)
from ..geometry.models import LatLon
from ..geometry.region import Region
from ..storage import JsonFileMilestoneStore, MilestoneStore
from ..tracking.events import EventListener, TrackerEvent, dispatch_events
from ..tracking.milestones import Badge, MilestoneStateMachine
from ..tracking.tracker import ExplorationTracker, FixInput


def _default_store() -> MilestoneStore:
    return JsonFileMilestoneStore(MILESTONE_STATE_FILE)


@dataclass(slots=True)
class ExplorationServiceConfig:
    boundary: Sequence[LatLon] = CENTRAL_PARK_BOUNDARY
    tile_size: float = TILE_SIZE_DEG
    thresholds: Sequence[int] = MILESTONE_THRESHOLDS
    precompute_total: bool = PRECOMPUTE_REGION_TOTAL
    save_attempts: int = MILESTONE_SAVE_ATTEMPTS
    store_factory: Callable[[], MilestoneStore] = _default_store
    listeners: List[EventListener] = field(default_factory=list)
    logger: logging.Logger | None = None


@dataclass(frozen=True, slots=True)
class ExplorationSnapshot:
    """Point-in-time summary of tracker state."""

    explored_tiles: int
    total_tiles: Optional[int]
    percent: Optional[float]
    fired_milestones: Tuple[int, ...]
    trail_length: int


class ExplorationService:
    """Thread-safe facade over one exploration tracker.

    Tracker calls run under a lock. Listeners are invoked after the lock is
    released, so a listener may call back into the service.
    """

    def __init__(self, config: ExplorationServiceConfig | None = None):
        self.config = config or ExplorationServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self._lock = threading.Lock()
        region = Region.from_latlon(self.config.boundary)
        milestones = MilestoneStateMachine(
            self.config.store_factory(),
            self.config.thresholds,
            save_attempts=self.config.save_attempts,
            logger=self.config.logger,
        )
        self._tracker = ExplorationTracker.for_region(
            region,
            self.config.tile_size,
            milestones,
            precompute_total=self.config.precompute_total,
            logger=self.config.logger,
        )
        self._listeners: List[EventListener] = list(self.config.listeners)
        self._log.info(
            "Exploration service ready tile_size=%s total_tiles=%s fired=%s",
            self.config.tile_size,
            self._tracker.total_tiles,
            sorted(milestones.fired),
        )

    @property
    def tracker(self) -> ExplorationTracker:
        return self._tracker

    def add_listener(self, listener: EventListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def observe(self, fix: FixInput) -> List[TrackerEvent]:
        with self._lock:
            events = self._tracker.observe(fix)
            listeners = list(self._listeners)
        dispatch_events(listeners, events, self._log)
        return events

    def observe_many(self, fixes: Iterable[FixInput]) -> List[TrackerEvent]:
        with self._lock:
            events = self._tracker.observe_many(fixes)
            listeners = list(self._listeners)
        dispatch_events(listeners, events, self._log)
        return events

    def compute_total(self) -> List[TrackerEvent]:
        with self._lock:
            events = self._tracker.compute_total()
            listeners = list(self._listeners)
        dispatch_events(listeners, events, self._log)
        return events

    def snapshot(self) -> ExplorationSnapshot:
        with self._lock:
            tracker = self._tracker
            return ExplorationSnapshot(
                explored_tiles=len(tracker.explored_tiles),
                total_tiles=tracker.total_tiles,
                percent=tracker.percent,
                fired_milestones=tuple(sorted(tracker.milestones.fired)),
                trail_length=len(tracker.trail),
            )

    def badges(self) -> List[Badge]:
        with self._lock:
            return self._tracker.milestones.badges()
