"""Park Explorer: GPS exploration coverage tracking package."""

from .errors import InvalidFixError, MilestoneStoreError, RegionConfigError
from .geometry import GeoPoint, Region, TileGrid, TileKey
from .main import main
from .services import ExplorationService, ExplorationServiceConfig
from .storage import InMemoryMilestoneStore, JsonFileMilestoneStore
from .tracking import ExplorationTracker, MilestoneStateMachine

__all__ = [
    "main",
    "GeoPoint",
    "Region",
    "TileGrid",
    "TileKey",
    "ExplorationService",
    "ExplorationServiceConfig",
    "ExplorationTracker",
    "MilestoneStateMachine",
    "InMemoryMilestoneStore",
    "JsonFileMilestoneStore",
    "InvalidFixError",
    "MilestoneStoreError",
    "RegionConfigError",
]
