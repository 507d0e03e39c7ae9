"""Coverage tracking and milestone signalling."""

from .events import (
    CoverageUpdated,
    EventListener,
    MilestoneReached,
    TileExplored,
    TrackerEvent,
    dispatch_events,
)
from .milestones import Badge, MilestoneStateMachine, milestone_message
from .tracker import ExplorationTracker

__all__ = [
    "CoverageUpdated",
    "EventListener",
    "MilestoneReached",
    "TileExplored",
    "TrackerEvent",
    "dispatch_events",
    "Badge",
    "MilestoneStateMachine",
    "milestone_message",
    "ExplorationTracker",
]
