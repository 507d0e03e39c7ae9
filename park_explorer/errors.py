"""Central error types used across the application."""

from __future__ import annotations


class ParkExplorerError(RuntimeError):
    """Base error for exploration tracking failures."""


class RegionConfigError(ParkExplorerError, ValueError):
    """Raised when the configured region polygon is malformed."""


class InvalidFixError(ParkExplorerError, ValueError):
    """Raised when a location fix has non-finite or out-of-range coordinates."""


class MilestoneStoreError(ParkExplorerError):
    """Raised when fired milestones cannot be loaded or saved."""


class FixFormatError(ParkExplorerError):
    """Raised when a fix input file cannot be parsed."""


__all__ = [
    "ParkExplorerError",
    "RegionConfigError",
    "InvalidFixError",
    "MilestoneStoreError",
    "FixFormatError",
]
