"""Central configuration for the Park Explorer tracker.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Values can be overridden through environment variables
(optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os
from typing import Tuple


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int_list(key: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        parsed = tuple(int(item) for item in value.split(",") if item.strip())
    except ValueError:
        return default
    return parsed or default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------
# Central Park boundary as (latitude, longitude) pairs. The ring is closed
# explicitly: the last vertex repeats the first.
CENTRAL_PARK_BOUNDARY: Tuple[Tuple[float, float], ...] = (
    (40.7969, -73.9495),
    (40.800686, -73.9580727),
    (40.7682567, -73.9820194),
    (40.7645514, -73.9731789),
    (40.7969, -73.9495),
)

# Width of one grid cell in decimal degrees (roughly 110 m of latitude).
TILE_SIZE_DEG = _env_float("PARK_EXPLORER_TILE_SIZE_DEG", 0.001)

# Count the in-region tiles when the tracker is built. When False the total
# stays unavailable until computed explicitly and no percentage is reported.
PRECOMPUTE_REGION_TOTAL = _env_bool("PARK_EXPLORER_PRECOMPUTE_REGION_TOTAL", True)


# ---------------------------------------------------------------------------
# Milestones
# ---------------------------------------------------------------------------
# Coverage percentages that trigger a one-time milestone event.
MILESTONE_THRESHOLDS: Tuple[int, ...] = _env_int_list(
    "PARK_EXPLORER_MILESTONES", (10, 25, 50, 75, 100)
)

# JSON file holding the fired milestones between runs (absolute or relative).
MILESTONE_STATE_FILE = os.getenv(
    "PARK_EXPLORER_MILESTONE_STATE_FILE", "park_explorer_milestones.json"
)

# Save attempts made before a milestone is emitted without durable storage.
MILESTONE_SAVE_ATTEMPTS = max(1, _env_int("PARK_EXPLORER_MILESTONE_SAVE_ATTEMPTS", 3))
