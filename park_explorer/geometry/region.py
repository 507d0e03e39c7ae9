"""Region polygon and the point containment test.

Latitude and longitude are treated as planar ``(y, x)`` coordinates. Over a
park-sized area the distortion is far below one tile, so no projection is
applied. Points lying exactly on an edge count as outside.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
import shapely
from shapely.geometry import LinearRing, Polygon

from ..errors import RegionConfigError
from .models import GeoPoint, LatLon


class Region:
    """Immutable simple polygon built once from configuration.

    Args:
        vertices: Ordered ring of points. The last vertex must repeat the first.

    Raises:
        RegionConfigError: If the ring is open, has fewer than three distinct
            vertices, holds invalid coordinates, or intersects itself.
    """

    __slots__ = ("_vertices", "_polygon")

    def __init__(self, vertices: Sequence[GeoPoint]) -> None:
        ring = tuple(vertices)
        _validate_ring(ring)
        self._vertices: Tuple[GeoPoint, ...] = ring
        polygon = Polygon([(p.longitude, p.latitude) for p in ring])
        if polygon.area <= 0:
            raise RegionConfigError("Region polygon has zero area")
        shapely.prepare(polygon)
        self._polygon = polygon

    @classmethod
    def from_latlon(cls, pairs: Iterable[LatLon]) -> "Region":
        return cls([GeoPoint.from_latlon(pair) for pair in pairs])

    @property
    def vertices(self) -> Tuple[GeoPoint, ...]:
        return self._vertices

    @property
    def polygon(self) -> Polygon:
        return self._polygon

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return the bounding box as (south, west, north, east)."""

        min_lon, min_lat, max_lon, max_lat = self._polygon.bounds
        return (min_lat, min_lon, max_lat, max_lon)

    def contains(self, point: GeoPoint) -> bool:
        return bool(shapely.contains_xy(self._polygon, point.longitude, point.latitude))

    def contains_many(self, latitudes: ArrayLike, longitudes: ArrayLike) -> NDArray[np.bool_]:
        """Vectorised :meth:`contains` over coordinate arrays."""

        return np.asarray(
            shapely.contains_xy(
                self._polygon,
                np.asarray(longitudes, dtype=float),
                np.asarray(latitudes, dtype=float),
            ),
            dtype=bool,
        )

    def interior_overlaps(self, geometries: ArrayLike) -> NDArray[np.bool_]:
        """Return which of ``geometries`` share interior area with the region.

        Geometries that only touch the boundary do not overlap.
        """

        return np.asarray(
            shapely.relate_pattern(geometries, self._polygon, "T********"),
            dtype=bool,
        )

    def __repr__(self) -> str:
        return f"Region(vertices={len(self._vertices)})"


def contains(region: Region, point: GeoPoint) -> bool:
    """Return True when ``point`` lies strictly inside ``region``."""

    return region.contains(point)


def _validate_ring(ring: Tuple[GeoPoint, ...]) -> None:
    if len(ring) < 4:
        raise RegionConfigError(
            f"Region ring needs at least 4 points including closure, got {len(ring)}"
        )
    invalid: List[GeoPoint] = [p for p in ring if not p.is_valid()]
    if invalid:
        raise RegionConfigError(f"Region has out-of-range vertices: {invalid}")
    if ring[0] != ring[-1]:
        raise RegionConfigError("Region ring is not closed: first and last points differ")
    distinct = set(ring[:-1])
    if len(distinct) < 3:
        raise RegionConfigError(
            f"Region needs at least 3 distinct vertices, got {len(distinct)}"
        )
    if not LinearRing([(p.longitude, p.latitude) for p in ring]).is_simple:
        raise RegionConfigError("Region ring intersects itself")
