"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable regions, stores and
trackers. Grid tests use power-of-two tile sizes so tile indices and
centroids are exact in binary floating point.
"""
from __future__ import annotations

import os
import sys
from typing import List

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from park_explorer.config import CENTRAL_PARK_BOUNDARY
from park_explorer.geometry import GeoPoint, Region
from park_explorer.storage import InMemoryMilestoneStore
from park_explorer.tracking import ExplorationTracker, MilestoneStateMachine, TrackerEvent

SQUARE_TILE = 0.125
SQUARE_BOUNDARY = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]


# --- Factory helpers -------------------------------------------------
def make_square_region() -> Region:
    return Region.from_latlon(SQUARE_BOUNDARY)


def row_center(index: int) -> float:
    return (index + 0.5) * SQUARE_TILE


def snake_fixes() -> List[GeoPoint]:
    """Fixes sweeping every row of the unit square, alternating direction."""

    fixes: List[GeoPoint] = []
    for row in range(8):
        west, east = row_center(0), row_center(7)
        if row % 2:
            west, east = east, west
        fixes.append(GeoPoint(row_center(row), west))
        fixes.append(GeoPoint(row_center(row), east))
    return fixes


class EventRecorder:
    """Listener collecting every event it receives."""

    def __init__(self) -> None:
        self.events: List[TrackerEvent] = []

    def __call__(self, event: TrackerEvent) -> None:
        self.events.append(event)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def square_region() -> Region:
    return make_square_region()


@pytest.fixture
def park_region() -> Region:
    return Region.from_latlon(CENTRAL_PARK_BOUNDARY)


@pytest.fixture
def memory_store() -> InMemoryMilestoneStore:
    return InMemoryMilestoneStore()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def square_tracker(square_region, memory_store, recorder) -> ExplorationTracker:
    milestones = MilestoneStateMachine(memory_store, (10, 25, 50, 75, 100))
    return ExplorationTracker.for_region(
        square_region, SQUARE_TILE, milestones, listeners=[recorder]
    )


@pytest.fixture
def square_tile() -> float:
    return SQUARE_TILE


@pytest.fixture
def snake() -> List[GeoPoint]:
    return snake_fixes()


@pytest.fixture
def square_boundary():
    return list(SQUARE_BOUNDARY)
