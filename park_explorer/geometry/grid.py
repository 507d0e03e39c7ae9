"""Fixed-resolution tile grid over latitude/longitude."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Tuple

from .models import GeoPoint, TileKey


def validate_tile_size(tile_size: float) -> float:
    size = float(tile_size)
    if not math.isfinite(size) or size <= 0:
        raise ValueError("tile_size must be a finite value greater than zero")
    return size


def tile_key(point: GeoPoint, tile_size: float) -> TileKey:
    """Return the key of the cell containing ``point``.

    Indices are floored toward negative infinity so cells stay the same width
    on both sides of the equator and the prime meridian.
    """

    size = validate_tile_size(tile_size)
    return TileKey(
        math.floor(point.latitude / size),
        math.floor(point.longitude / size),
    )


def tile_center(key: TileKey, tile_size: float) -> GeoPoint:
    """Return the centroid of the cell identified by ``key``."""

    size = validate_tile_size(tile_size)
    return GeoPoint((key.lat_index + 0.5) * size, (key.lon_index + 0.5) * size)


def tile_bounds(key: TileKey, tile_size: float) -> Tuple[float, float, float, float]:
    """Return cell bounds as (south, west, north, east)."""

    size = validate_tile_size(tile_size)
    south = key.lat_index * size
    west = key.lon_index * size
    return (south, west, south + size, west + size)


@dataclass(frozen=True, slots=True)
class TileGrid:
    """Grid bound to a single tile size."""

    tile_size: float

    def __post_init__(self) -> None:
        validate_tile_size(self.tile_size)

    def key_for(self, point: GeoPoint) -> TileKey:
        return tile_key(point, self.tile_size)

    def center_of(self, key: TileKey) -> GeoPoint:
        return tile_center(key, self.tile_size)

    def bounds_of(self, key: TileKey) -> Tuple[float, float, float, float]:
        return tile_bounds(key, self.tile_size)
