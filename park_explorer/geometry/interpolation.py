"""Straight-line gap filling between consecutive fixes."""

from __future__ import annotations

from typing import List

import numpy as np

from .grid import validate_tile_size
from .models import GeoPoint


def interpolation_steps(start: GeoPoint, end: GeoPoint, tile_size: float) -> int:
    """Return the number of tile-sized steps between two fixes.

    The larger of the latitude and longitude spans is divided by the tile size
    and truncated toward zero.
    """

    size = validate_tile_size(tile_size)
    span = max(
        abs(end.latitude - start.latitude) / size,
        abs(end.longitude - start.longitude) / size,
    )
    return int(span)


def interpolate(start: GeoPoint, end: GeoPoint, tile_size: float) -> List[GeoPoint]:
    """Return points from ``start`` to ``end`` spaced at most one tile apart.

    When the fixes are less than one tile apart the result is ``[end]``.
    Otherwise ``steps + 1`` evenly spaced points are produced, the first equal
    to ``start`` and the last equal to ``end``.
    """

    steps = interpolation_steps(start, end, tile_size)
    if steps <= 0:
        return [end]
    lats = np.linspace(start.latitude, end.latitude, steps + 1)
    lons = np.linspace(start.longitude, end.longitude, steps + 1)
    points = [GeoPoint(float(lat), float(lon)) for lat, lon in zip(lats, lons)]
    points[0] = start
    points[-1] = end
    return points
