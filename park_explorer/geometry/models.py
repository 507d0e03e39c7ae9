"""Value types describing fixes and grid cells."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Tuple

from ..errors import InvalidFixError

LatLon = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @classmethod
    def from_latlon(cls, pair: LatLon) -> "GeoPoint":
        lat, lon = pair
        return cls(float(lat), float(lon))

    def as_latlon(self) -> LatLon:
        return (self.latitude, self.longitude)

    def is_valid(self) -> bool:
        """Return True when both coordinates are finite and within range."""

        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )


@dataclass(frozen=True, slots=True)
class TileKey:
    """Integer grid indices identifying one tile."""

    lat_index: int
    lon_index: int

    def __str__(self) -> str:
        return f"{self.lat_index}_{self.lon_index}"


def validate_fix(point: GeoPoint) -> GeoPoint:
    """Return ``point`` unchanged or raise :class:`InvalidFixError`."""

    if not point.is_valid():
        raise InvalidFixError(
            f"Fix out of range: lat={point.latitude!r} lon={point.longitude!r}"
        )
    return point
