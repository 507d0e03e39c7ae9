"""Utility entry points for supplementary exploration tooling."""

from .replay_fixes import ReplaySummary, replay_fixes

__all__ = ["ReplaySummary", "replay_fixes"]
