"""Geometry primitives for region containment, tiling and gap filling."""

from .models import GeoPoint, LatLon, TileKey, validate_fix
from .region import Region, contains
from .grid import TileGrid, tile_bounds, tile_center, tile_key
from .coverage import RegionCoverageCounter, region_tile_keys, total_tiles_in_region
from .interpolation import interpolate, interpolation_steps

__all__ = [
    "GeoPoint",
    "LatLon",
    "TileKey",
    "validate_fix",
    "Region",
    "contains",
    "TileGrid",
    "tile_bounds",
    "tile_center",
    "tile_key",
    "RegionCoverageCounter",
    "region_tile_keys",
    "total_tiles_in_region",
    "interpolate",
    "interpolation_steps",
]
