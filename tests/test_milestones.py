"""Tests for the milestone state machine."""

from __future__ import annotations

from typing import AbstractSet, List, Set

import pytest

from park_explorer.errors import MilestoneStoreError
from park_explorer.storage import InMemoryMilestoneStore
from park_explorer.tracking import MilestoneStateMachine, milestone_message


class FlakyStore(InMemoryMilestoneStore):
    """Store failing the first ``failures`` saves."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    def save(self, fired: AbstractSet[int]) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise MilestoneStoreError("disk full")
        super().save(fired)


class OrderingStore(InMemoryMilestoneStore):
    """Records each saved snapshot so ordering can be checked."""

    def __init__(self) -> None:
        super().__init__()
        self.snapshots: List[Set[int]] = []

    def save(self, fired: AbstractSet[int]) -> None:
        self.snapshots.append(set(fired))
        super().save(fired)


def test_jump_to_full_coverage_fires_all_in_order(memory_store) -> None:
    machine = MilestoneStateMachine(memory_store, (10, 25, 50, 75, 100))
    events = machine.check_and_fire(100.0)
    assert [e.threshold for e in events] == [10, 25, 50, 75, 100]
    assert machine.complete
    assert machine.check_and_fire(100.0) == []
    assert machine.check_and_fire(0.0) == []


def test_partial_jump_fires_skipped_thresholds(memory_store) -> None:
    machine = MilestoneStateMachine(memory_store)
    events = machine.check_and_fire(60.0)
    assert [e.threshold for e in events] == [10, 25, 50]
    assert machine.pending() == (75, 100)


def test_percent_is_floored(memory_store) -> None:
    machine = MilestoneStateMachine(memory_store)
    assert machine.check_and_fire(9.99) == []
    assert [e.threshold for e in machine.check_and_fire(10.0)] == [10]


def test_restart_durability() -> None:
    store = InMemoryMilestoneStore({10, 25})
    machine = MilestoneStateMachine(store)
    assert machine.fired == frozenset({10, 25})
    assert machine.check_and_fire(30.0) == []
    assert [e.threshold for e in machine.check_and_fire(60.0)] == [50]
    assert store.load() == {10, 25, 50}


def test_each_threshold_persisted_before_emission() -> None:
    store = OrderingStore()
    machine = MilestoneStateMachine(store)
    events = machine.check_and_fire(55.0)
    assert [e.threshold for e in events] == [10, 25, 50]
    assert store.snapshots == [{10}, {10, 25}, {10, 25, 50}]


def test_save_retried_then_succeeds() -> None:
    store = FlakyStore(failures=2)
    machine = MilestoneStateMachine(store, save_attempts=3)
    events = machine.check_and_fire(10.0)
    assert [e.threshold for e in events] == [10]
    assert store.attempts == 3
    assert store.load() == {10}


def test_save_failure_does_not_block_event(caplog: pytest.LogCaptureFixture) -> None:
    store = FlakyStore(failures=99)
    machine = MilestoneStateMachine(store, save_attempts=2)
    with caplog.at_level("WARNING"):
        events = machine.check_and_fire(25.0)
    assert [e.threshold for e in events] == [10, 25]
    assert machine.fired == frozenset({10, 25})
    assert "may fire again after a restart" in caplog.text
    # In-memory state still prevents a repeat within this process.
    assert machine.check_and_fire(25.0) == []


def test_load_failure_starts_empty(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenStore(InMemoryMilestoneStore):
        def load(self) -> Set[int]:
            raise MilestoneStoreError("unreadable")

    with caplog.at_level("ERROR"):
        machine = MilestoneStateMachine(BrokenStore())
    assert machine.fired == frozenset()
    assert "Failed loading fired milestones" in caplog.text


def test_unknown_stored_thresholds_are_kept() -> None:
    store = InMemoryMilestoneStore({33})
    machine = MilestoneStateMachine(store, (10, 50))
    events = machine.check_and_fire(50.0)
    assert [e.threshold for e in events] == [10, 50]
    assert store.load() == {10, 33, 50}


def test_non_finite_percent_ignored(memory_store) -> None:
    machine = MilestoneStateMachine(memory_store)
    assert machine.check_and_fire(float("nan")) == []
    assert machine.fired == frozenset()


@pytest.mark.parametrize("thresholds", [(), (0, 10), (10, 101), (10.5,), (True,)])
def test_invalid_thresholds_rejected(memory_store, thresholds) -> None:
    with pytest.raises(ValueError):
        MilestoneStateMachine(memory_store, thresholds)


def test_thresholds_sorted_and_deduplicated(memory_store) -> None:
    machine = MilestoneStateMachine(memory_store, (50, 10, 50, 25))
    assert machine.thresholds == (10, 25, 50)


def test_badges_reflect_fired_state() -> None:
    machine = MilestoneStateMachine(InMemoryMilestoneStore({10, 50}))
    badges = machine.badges()
    assert [b.label for b in badges] == ["10%", "25%", "50%", "75%", "100%"]
    assert [b.earned for b in badges] == [True, False, True, False, False]


def test_messages() -> None:
    assert "Halfway" in milestone_message(50)
    assert "complete" in milestone_message(100)
    assert milestone_message(42) == "42% explored, keep it up!"
    event = MilestoneStateMachine(InMemoryMilestoneStore()).check_and_fire(10)[0]
    assert event.message == milestone_message(10)
