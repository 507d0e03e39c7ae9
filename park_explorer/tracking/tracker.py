"""Exploration tracker: turns a stream of fixes into coverage and milestones.

The tracker owns the explored tile set, the trail and the previous fix. It is
single-threaded: callers delivering fixes from several threads must
serialise access (see :class:`park_explorer.services.ExplorationService`).
"""

from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple, Union

from ..errors import InvalidFixError
from ..geometry.coverage import RegionCoverageCounter
from ..geometry.grid import TileGrid
from ..geometry.interpolation import interpolate
from ..geometry.models import GeoPoint, LatLon, TileKey, validate_fix
from ..geometry.region import Region
from .events import (
    CoverageUpdated,
    EventListener,
    TileExplored,
    TrackerEvent,
    dispatch_events,
)
from .milestones import MilestoneStateMachine

FixInput = Union[GeoPoint, LatLon]


class ExplorationTracker:
    """Accumulates explored tiles inside a region and drives milestones.

    Args:
        counter: Region tile counter; supplies the region, grid and total.
        milestones: Milestone state machine fed with every coverage change.
        listeners: Callables receiving every emitted event.
        logger: Optional logger override.
    """

    def __init__(
        self,
        counter: RegionCoverageCounter,
        milestones: MilestoneStateMachine,
        *,
        listeners: Iterable[EventListener] = (),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._counter = counter
        self._milestones = milestones
        self._listeners: List[EventListener] = list(listeners)
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._explored: Set[TileKey] = set()
        self._trail: List[GeoPoint] = []
        self._previous: Optional[GeoPoint] = None

    @classmethod
    def for_region(
        cls,
        region: Region,
        tile_size: float,
        milestones: MilestoneStateMachine,
        *,
        precompute_total: bool = True,
        listeners: Iterable[EventListener] = (),
        logger: Optional[logging.Logger] = None,
    ) -> "ExplorationTracker":
        counter = RegionCoverageCounter(
            region, TileGrid(tile_size), precompute=precompute_total
        )
        return cls(counter, milestones, listeners=listeners, logger=logger)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def region(self) -> Region:
        return self._counter.region

    @property
    def grid(self) -> TileGrid:
        return self._counter.grid

    @property
    def milestones(self) -> MilestoneStateMachine:
        return self._milestones

    @property
    def explored_tiles(self) -> FrozenSet[TileKey]:
        return frozenset(self._explored)

    @property
    def trail(self) -> Tuple[GeoPoint, ...]:
        return tuple(self._trail)

    @property
    def previous_fix(self) -> Optional[GeoPoint]:
        return self._previous

    @property
    def total_tiles(self) -> Optional[int]:
        return self._counter.total

    @property
    def percent(self) -> Optional[float]:
        """Explored share of region tiles, or None while the total is unknown."""

        total = self._counter.total
        if not total:
            return None
        return 100.0 * len(self._explored) / total

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def observe(self, fix: FixInput) -> List[TrackerEvent]:
        """Ingest one raw fix and return the events it produced.

        Fixes with non-finite or out-of-range coordinates are discarded and
        leave the tracker unchanged.
        """

        try:
            point = validate_fix(_as_point(fix))
        except (InvalidFixError, TypeError, ValueError) as exc:
            self._log.warning("Discarding fix %r: %s", fix, exc)
            return []

        self._trail.append(point)
        if self._previous is None:
            candidates: Sequence[GeoPoint] = [point]
        else:
            candidates = interpolate(self._previous, point, self.grid.tile_size)
            if len(candidates) > 1:
                # The first sample repeats the previous fix, already processed.
                candidates = candidates[1:]

        events: List[TrackerEvent] = []
        for candidate in candidates:
            events.extend(self._explore(candidate))
        self._previous = point
        self._dispatch(events)
        return events

    def observe_many(self, fixes: Iterable[FixInput]) -> List[TrackerEvent]:
        events: List[TrackerEvent] = []
        for fix in fixes:
            events.extend(self.observe(fix))
        return events

    def compute_total(self) -> List[TrackerEvent]:
        """Make the region total available and report coverage accumulated so far."""

        self._counter.compute()
        events: List[TrackerEvent] = []
        if self._explored:
            events.extend(self._report_coverage())
        self._dispatch(events)
        return events

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _explore(self, point: GeoPoint) -> List[TrackerEvent]:
        if not self.region.contains(point):
            return []
        key = self.grid.key_for(point)
        if key in self._explored:
            return []
        self._explored.add(key)
        center = self.grid.center_of(key)
        self._log.debug("Tile explored key=%s explored=%d", key, len(self._explored))
        events: List[TrackerEvent] = [TileExplored(key, center)]
        events.extend(self._report_coverage())
        return events

    def _report_coverage(self) -> List[TrackerEvent]:
        percent = self.percent
        if percent is None:
            self._log.info(
                "Region tile total unavailable; coverage not reported (explored=%d)",
                len(self._explored),
            )
            return []
        events: List[TrackerEvent] = [CoverageUpdated(percent)]
        events.extend(self._milestones.check_and_fire(percent))
        return events

    def _dispatch(self, events: Sequence[TrackerEvent]) -> None:
        dispatch_events(self._listeners, events, self._log)


def _as_point(fix: FixInput) -> GeoPoint:
    if isinstance(fix, GeoPoint):
        return fix
    return GeoPoint.from_latlon(fix)
