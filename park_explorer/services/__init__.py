"""Service layer wiring configuration to the tracking core."""

from .exploration_service import (
    ExplorationService,
    ExplorationServiceConfig,
    ExplorationSnapshot,
)

__all__ = ["ExplorationService", "ExplorationServiceConfig", "ExplorationSnapshot"]
