"""Monotonic milestone state machine with durable exactly-once firing."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from ..config import MILESTONE_SAVE_ATTEMPTS, MILESTONE_THRESHOLDS
from ..storage import MilestoneStore
from .events import MilestoneReached

_MESSAGES = {
    10: "10% explored! You're just getting started.",
    25: "25% explored! Keep going, you're making great progress!",
    50: "Halfway there! You've explored 50% of the park!",
    75: "75% explored! Almost there, just a little more to go!",
    100: "100% complete! You've explored the whole park! Incredible work!",
}


def milestone_message(threshold: int) -> str:
    """Return the celebration text shown for ``threshold``."""

    return _MESSAGES.get(threshold, f"{threshold}% explored, keep it up!")


@dataclass(frozen=True, slots=True)
class Badge:
    """Display record for one milestone threshold."""

    percent: int
    label: str
    earned: bool


def normalise_thresholds(thresholds: Iterable[int]) -> Tuple[int, ...]:
    """Return unique thresholds in ascending order.

    Raises:
        ValueError: If a threshold is not an integer between 1 and 100 or the
            collection is empty.
    """

    values: Set[int] = set()
    for raw in thresholds:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ValueError(f"Milestone threshold must be an integer, got {raw!r}")
        if not 1 <= raw <= 100:
            raise ValueError(f"Milestone threshold {raw} outside 1..100")
        values.add(raw)
    if not values:
        raise ValueError("At least one milestone threshold is required")
    return tuple(sorted(values))


class MilestoneStateMachine:
    """Fires each threshold at most once, persisting before every emission.

    Args:
        store: Persistence collaborator consulted once for the initial state
            and written on every change.
        thresholds: Coverage percentages to signal.
        save_attempts: Save attempts before the event is emitted without a
            durable record.
        logger: Optional logger override.

    A failed save does not block the in-memory event. This favours delivering
    the milestone now over the guarantee that a crash before the next
    successful save cannot fire it again after a restart. Failed saves are
    logged at error level.
    """

    def __init__(
        self,
        store: MilestoneStore,
        thresholds: Sequence[int] = MILESTONE_THRESHOLDS,
        *,
        save_attempts: int = MILESTONE_SAVE_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._thresholds = normalise_thresholds(thresholds)
        self._save_attempts = max(1, save_attempts)
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._fired: Set[int] = self._load_initial()

    @property
    def thresholds(self) -> Tuple[int, ...]:
        return self._thresholds

    @property
    def fired(self) -> FrozenSet[int]:
        return frozenset(self._fired)

    @property
    def complete(self) -> bool:
        return all(threshold in self._fired for threshold in self._thresholds)

    def pending(self) -> Tuple[int, ...]:
        return tuple(t for t in self._thresholds if t not in self._fired)

    def check_and_fire(self, percent: float) -> List[MilestoneReached]:
        """Fire every unfired threshold at or below ``percent``, ascending."""

        if not math.isfinite(percent):
            self._log.warning("Ignoring non-finite coverage percent=%s", percent)
            return []
        current = math.floor(percent)
        events: List[MilestoneReached] = []
        for threshold in self._thresholds:
            if threshold > current:
                break
            if threshold in self._fired:
                continue
            self._fired.add(threshold)
            self._persist(threshold)
            events.append(MilestoneReached(threshold, milestone_message(threshold)))
            self._log.info("Milestone reached threshold=%d%%", threshold)
        return events

    def badges(self) -> List[Badge]:
        return [
            Badge(percent=t, label=f"{t}%", earned=t in self._fired)
            for t in self._thresholds
        ]

    def _load_initial(self) -> Set[int]:
        try:
            loaded = {int(value) for value in self._store.load()}
        except Exception as exc:
            self._log.error(
                "Failed loading fired milestones, starting with none: %s", exc
            )
            return set()
        unknown = loaded.difference(self._thresholds)
        if unknown:
            self._log.debug("Stored milestones not configured here: %s", sorted(unknown))
        return loaded

    def _persist(self, threshold: int) -> None:
        snapshot = set(self._fired)
        for attempt in range(1, self._save_attempts + 1):
            try:
                self._store.save(snapshot)
                return
            except Exception as exc:
                self._log.warning(
                    "Milestone save failed threshold=%d attempt=%d/%d: %s",
                    threshold,
                    attempt,
                    self._save_attempts,
                    exc,
                )
        self._log.error(
            "Milestone %d emitted without durable record; it may fire again after a restart",
            threshold,
        )
