"""Readers turning recorded location files into fix sequences.

Supported inputs, chosen by file suffix:

- ``.json``: ``[[lat, lon], ...]``, ``[{"lat": .., "lon": ..}, ...]``, or a
  stream payload with a ``latlng`` list (optionally nested under ``streams``).
- ``.csv``: rows with ``latitude``/``longitude`` (or ``lat``/``lon``/``lng``).
- ``.gpx``: every ``trkpt`` element.
- ``.polyline`` / ``.txt``: one encoded polyline string.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET
import pandas as pd
from polyline import decode as polyline_decode

from .errors import FixFormatError
from .geometry.models import GeoPoint

_LOGGER = logging.getLogger(__name__)

_LAT_COLUMNS = ("latitude", "lat")
_LON_COLUMNS = ("longitude", "lon", "lng")


def _point_from_mapping(item: Mapping[str, Any]) -> GeoPoint:
    lat = next((item[k] for k in _LAT_COLUMNS if k in item), None)
    lon = next((item[k] for k in _LON_COLUMNS if k in item), None)
    if lat is None or lon is None:
        raise FixFormatError(f"Fix entry lacks latitude/longitude: {item!r}")
    return GeoPoint(float(lat), float(lon))


def _points_from_sequence(items: Iterable[Any]) -> List[GeoPoint]:
    points: List[GeoPoint] = []
    for item in items:
        try:
            if isinstance(item, Mapping):
                points.append(_point_from_mapping(item))
            else:
                lat, lon = item
                points.append(GeoPoint(float(lat), float(lon)))
        except (TypeError, ValueError) as exc:
            raise FixFormatError(f"Malformed fix entry {item!r}") from exc
    return points


def _extract_latlng(payload: Dict[str, Any]) -> Any:
    if "latlng" in payload:
        latlng = payload["latlng"]
    elif isinstance(payload.get("streams"), dict):
        latlng = payload["streams"].get("latlng")
    else:
        raise FixFormatError("JSON object has no 'latlng' stream")
    # Raw Strava stream objects wrap the series in {"data": [...]}.
    if isinstance(latlng, dict):
        latlng = latlng.get("data")
    if not isinstance(latlng, list):
        raise FixFormatError("'latlng' stream is not a list")
    return latlng


def read_json_fixes(path: Path) -> List[GeoPoint]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except ValueError as exc:
        raise FixFormatError(f"Invalid JSON in {path}: {exc}") from exc
    if isinstance(payload, dict):
        payload = _extract_latlng(payload)
    if not isinstance(payload, list):
        raise FixFormatError(f"Unsupported JSON layout in {path}")
    return _points_from_sequence(payload)


def read_csv_fixes(path: Path) -> List[GeoPoint]:
    try:
        frame = pd.read_csv(path, float_precision="round_trip")
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise FixFormatError(f"Invalid CSV in {path}: {exc}") from exc
    columns = {str(c).strip().lower(): c for c in frame.columns}
    lat_col = next((columns[c] for c in _LAT_COLUMNS if c in columns), None)
    lon_col = next((columns[c] for c in _LON_COLUMNS if c in columns), None)
    if lat_col is None or lon_col is None:
        raise FixFormatError(
            f"CSV {path} needs latitude/longitude columns, found {list(frame.columns)}"
        )
    coords = pd.DataFrame(
        {
            "lat": pd.to_numeric(frame[lat_col], errors="coerce"),
            "lon": pd.to_numeric(frame[lon_col], errors="coerce"),
        }
    )
    valid = coords.dropna()
    skipped = len(coords) - len(valid)
    if skipped:
        _LOGGER.warning("Skipped %d unparsable CSV rows in %s", skipped, path)
    return [
        GeoPoint(float(lat), float(lon))
        for lat, lon in zip(valid["lat"].to_numpy(), valid["lon"].to_numpy())
    ]


def read_gpx_fixes(path: Path) -> List[GeoPoint]:
    try:
        tree = ET.parse(path)
    except ET.ParseError as exc:
        raise FixFormatError(f"Invalid GPX in {path}: {exc}") from exc
    except DefusedXmlException as exc:
        raise FixFormatError(f"Refusing unsafe GPX in {path}: {exc!r}") from exc
    points: List[GeoPoint] = []
    for element in tree.getroot().iter():
        if not str(element.tag).endswith("trkpt"):
            continue
        try:
            points.append(GeoPoint(float(element.get("lat")), float(element.get("lon"))))
        except (TypeError, ValueError):
            _LOGGER.warning("Skipping trkpt without numeric lat/lon in %s", path)
    return points


def read_polyline_fixes(path: Path) -> List[GeoPoint]:
    try:
        encoded = path.read_text(encoding="utf-8").strip()
    except UnicodeDecodeError as exc:
        raise FixFormatError(f"Polyline file {path} is not UTF-8 text") from exc
    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded)
    except (ValueError, TypeError, IndexError) as exc:
        raise FixFormatError(f"Unable to decode polyline in {path}") from exc
    return [GeoPoint(float(lat), float(lon)) for lat, lon in decoded]


_READERS: Dict[str, Callable[[Path], List[GeoPoint]]] = {
    ".json": read_json_fixes,
    ".csv": read_csv_fixes,
    ".gpx": read_gpx_fixes,
    ".polyline": read_polyline_fixes,
    ".txt": read_polyline_fixes,
}


def supported_suffixes() -> Sequence[str]:
    return tuple(_READERS)


def load_fixes(path: str | Path) -> List[GeoPoint]:
    """Return the fixes stored in ``path`` in file order.

    Raises:
        FixFormatError: If the suffix is unsupported or the content is malformed.
        FileNotFoundError: If ``path`` does not exist.
    """

    source = Path(path)
    reader = _READERS.get(source.suffix.lower())
    if reader is None:
        raise FixFormatError(
            f"Unsupported fix file '{source.name}'; expected one of {supported_suffixes()}"
        )
    points = reader(source)
    _LOGGER.info("Loaded %d fixes from %s", len(points), source)
    return points
