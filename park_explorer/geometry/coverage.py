"""Count the tiles that belong to the region.

A tile belongs to the region when its cell shares interior area with the
polygon. Any point strictly inside the polygon therefore falls in a counted
tile, so explored tiles are always a subset of the counted tiles.
"""

from __future__ import annotations

import logging
import math
from threading import RLock
from typing import FrozenSet, Optional, Tuple

from cachetools import LRUCache
import numpy as np
import shapely

from .grid import TileGrid
from .models import GeoPoint, TileKey
from .region import Region

_LOGGER = logging.getLogger(__name__)

_TileSetKey = Tuple[Tuple[GeoPoint, ...], float]

# Tile sets keyed by (ring, tile size); trackers rebuilt for the same region
# reuse the enumeration.
_TILE_SET_CACHE: LRUCache[_TileSetKey, FrozenSet[TileKey]] = LRUCache(maxsize=16)
_TILE_SET_CACHE_LOCK = RLock()


def _index_range(lower: float, upper: float, tile_size: float) -> np.ndarray:
    start = math.floor(lower / tile_size)
    stop = math.floor(upper / tile_size)
    return np.arange(start, stop + 1, dtype=np.int64)


def region_tile_keys(region: Region, tile_size: float) -> FrozenSet[TileKey]:
    """Return every tile key whose cell overlaps the interior of ``region``."""

    grid = TileGrid(tile_size)
    size = grid.tile_size
    south, west, north, east = region.bounds()
    lat_indices = _index_range(south, north, size)
    lon_indices = _index_range(west, east, size)
    lat_grid, lon_grid = np.meshgrid(lat_indices, lon_indices, indexing="ij")
    # Same arithmetic as tile_bounds so both paths agree bit for bit.
    souths = lat_grid * size
    wests = lon_grid * size
    cells = shapely.box(wests, souths, wests + size, souths + size)
    inside = region.interior_overlaps(cells)
    rows, cols = np.nonzero(inside)
    return frozenset(
        TileKey(int(lat_grid[r, c]), int(lon_grid[r, c])) for r, c in zip(rows, cols)
    )


def cached_region_tile_keys(region: Region, tile_size: float) -> FrozenSet[TileKey]:
    """:func:`region_tile_keys` memoised per ring and tile size."""

    key: _TileSetKey = (region.vertices, float(tile_size))
    with _TILE_SET_CACHE_LOCK:
        cached = _TILE_SET_CACHE.get(key)
    if cached is not None:
        return cached
    tiles = region_tile_keys(region, tile_size)
    with _TILE_SET_CACHE_LOCK:
        _TILE_SET_CACHE[key] = tiles
    return tiles


def total_tiles_in_region(region: Region, tile_size: float) -> int:
    """Return the number of tiles overlapping the interior of ``region``."""

    return len(cached_region_tile_keys(region, tile_size))


class RegionCoverageCounter:
    """Holds the in-region tile set and its size for one region and grid.

    Args:
        region: Boundary polygon.
        grid: Tile grid used for discretisation.
        precompute: Count tiles immediately. When False the total stays
            unavailable until :meth:`compute` is called.
    """

    def __init__(
        self,
        region: Region,
        grid: TileGrid,
        *,
        precompute: bool = True,
    ) -> None:
        self._region = region
        self._grid = grid
        self._tiles: Optional[FrozenSet[TileKey]] = None
        if precompute:
            self.compute()

    @property
    def region(self) -> Region:
        return self._region

    @property
    def grid(self) -> TileGrid:
        return self._grid

    @property
    def total(self) -> Optional[int]:
        """Number of in-region tiles, or None while not computed."""

        return None if self._tiles is None else len(self._tiles)

    @property
    def available(self) -> bool:
        return bool(self.total)

    @property
    def tiles(self) -> Optional[FrozenSet[TileKey]]:
        return self._tiles

    def compute(self) -> int:
        if self._tiles is None:
            self._tiles = cached_region_tile_keys(self._region, self._grid.tile_size)
            _LOGGER.info(
                "Region tile total computed tiles=%d tile_size=%s",
                len(self._tiles),
                self._grid.tile_size,
            )
        return len(self._tiles)
