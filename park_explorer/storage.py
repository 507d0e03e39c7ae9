"""Persistence collaborators for fired milestones.

The tracker only needs ``load`` and ``save``; anything offering those two
methods can be injected. Two implementations ship with the package: an
in-memory store for tests and embedding, and a JSON file store that writes
atomically through a temporary file.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import AbstractSet, Any, Dict, Iterable, Protocol, Set

from .errors import MilestoneStoreError

_LOGGER = logging.getLogger(__name__)


class MilestoneStore(Protocol):
    """Read/write interface for the set of fired milestone thresholds."""

    def load(self) -> Set[int]:
        ...

    def save(self, fired: AbstractSet[int]) -> None:
        ...


class InMemoryMilestoneStore:
    """Store keeping fired milestones in process memory."""

    def __init__(self, initial: Iterable[int] = ()) -> None:
        self._fired: Set[int] = {int(value) for value in initial}
        self.save_count = 0

    def load(self) -> Set[int]:
        return set(self._fired)

    def save(self, fired: AbstractSet[int]) -> None:
        self._fired = {int(value) for value in fired}
        self.save_count += 1


class JsonFileMilestoneStore:
    """Store persisting fired milestones to a JSON file.

    The file holds ``{"fired": [...], "updated_at": "..."}``. A missing file
    loads as an empty set; unreadable or malformed content raises
    :class:`MilestoneStoreError`.
    """

    def __init__(self, path: str | Path) -> None:
        base = Path(path)
        self._path = base if base.is_absolute() else Path.cwd() / base
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Set[int]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return set()
        except (OSError, ValueError) as exc:
            raise MilestoneStoreError(
                f"Failed reading milestone file {self._path}: {exc}"
            ) from exc
        return _parse_payload(payload, self._path)

    def save(self, fired: AbstractSet[int]) -> None:
        payload = {
            "fired": sorted(int(value) for value in fired),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            try:
                self._write_file(payload)
            except OSError as exc:
                raise MilestoneStoreError(
                    f"Failed writing milestone file {self._path}: {exc}"
                ) from exc
        _LOGGER.debug("Milestones saved path=%s fired=%s", self._path, payload["fired"])

    def _write_file(self, payload: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with temp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=True, indent=2)
        temp_path.replace(self._path)


def _parse_payload(payload: Any, path: Path) -> Set[int]:
    if not isinstance(payload, dict) or not isinstance(payload.get("fired"), list):
        raise MilestoneStoreError(f"Milestone file {path} has an unexpected layout")
    try:
        return {int(value) for value in payload["fired"]}
    except (TypeError, ValueError) as exc:
        raise MilestoneStoreError(
            f"Milestone file {path} contains non-integer thresholds"
        ) from exc


__all__ = ["MilestoneStore", "InMemoryMilestoneStore", "JsonFileMilestoneStore"]
