# src/geojsonify/geo/geometry.py
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from shapely.errors import ShapelyError
from shapely.geometry import mapping, shape

from geojsonify.config.logging import get_logger
from geojsonify.geo.geometry_spec import (
    CompositeRef,
    DottedFieldRef,
    FieldRef,
    GeometryEntry,
    GeometrySpec,
    NestedCoordinatePairRef,
    PairRef,
    Path,
)

logger = get_logger(__name__)

GeometryPredicate = Callable[[Mapping[str, Any]], bool]


class Absent(Enum):
    """A record whose nested geometry path could not be walked."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent.ABSENT

# internal: the entry does not apply to this record, try the next one
_SKIP = object()
_MISSING = object()

GeometryResult = Union[dict, Mapping[str, Any], None, Absent]


def get_path(record: Mapping[str, Any], path: Path) -> Any:
    """
    Walk `path` through nested mappings.

    Returns the module-private _MISSING marker when a segment is missing or an
    intermediate value is not a mapping (None included).
    """
    value: Any = record
    for segment in path:
        if not isinstance(value, Mapping) or segment not in value:
            return _MISSING
        value = value[segment]
    return value


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a coordinate component to float. Numeric strings are accepted.

    Returns None for anything that is not a finite number (booleans included).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _resolve_pair(record: Mapping[str, Any], pair: PairRef) -> Any:
    values = []
    for path in pair.paths:
        value = get_path(record, path)
        if value is _MISSING:
            return ABSENT if pair.nested else _SKIP
        values.append(value)

    numbers = [to_number(v) for v in values]
    if any(n is None for n in numbers):
        return None

    # (lat, lng[, alt]) in, (lng, lat[, alt]) out
    lat, lng, *alt = numbers
    return [lng, lat, *alt]


def _resolve_composite(record: Mapping[str, Any], ref: CompositeRef) -> Any:
    coordinates = []
    for sub_key, pair in ref.parts:
        sub_record = record.get(sub_key)
        if not isinstance(sub_record, Mapping):
            return ABSENT
        point = _resolve_pair(sub_record, pair)
        if point is _SKIP or point is ABSENT:
            return ABSENT
        if point is None:
            return None
        coordinates.append(point)
    return coordinates


def _resolve_nested_coordinates(record: Mapping[str, Any], ref: NestedCoordinatePairRef) -> Any:
    if ref.field not in record:
        return _SKIP

    stored = record[ref.field]
    if not isinstance(stored, (list, tuple)) or len(stored) < 2:
        return None

    lat = to_number(stored[ref.lat_index])
    lng = to_number(stored[ref.lng_index])
    if lat is None or lng is None:
        return None
    return [lng, lat]


def _resolve_passthrough(record: Mapping[str, Any], ref: Union[FieldRef, DottedFieldRef]) -> Any:
    if isinstance(ref, FieldRef):
        if ref.name not in record:
            return _SKIP
        value = record[ref.name]
    else:
        value = get_path(record, ref.path)
        if value is _MISSING:
            return ABSENT

    # shapely geometries, GeoDataFrame cells, anything speaking the geo interface
    if not isinstance(value, Mapping) and hasattr(value, "__geo_interface__"):
        return mapping(value)
    return value


def _resolve_coordinates(record: Mapping[str, Any], entry: GeometryEntry) -> Any:
    ref = entry.ref
    if isinstance(ref, FieldRef):
        return record[ref.name] if ref.name in record else _SKIP
    if isinstance(ref, DottedFieldRef):
        value = get_path(record, ref.path)
        return ABSENT if value is _MISSING else value
    if isinstance(ref, CompositeRef):
        return _resolve_composite(record, ref)
    if isinstance(ref, PairRef):
        return _resolve_pair(record, ref)
    return _resolve_nested_coordinates(record, ref)


def resolve_geometry(record: Mapping[str, Any], spec: GeometrySpec) -> GeometryResult:
    """
    Build the geometry of one record.

    Entries are tried in order and the first one that applies wins. Returns:
      - a geometry mapping ({"type", "coordinates"} or a passthrough object),
      - None when no entry applies or coordinates could not be coerced,
      - ABSENT when a nested path is missing from the record.
    """
    for entry in spec.entries:
        if entry.kind.is_passthrough:
            result = _resolve_passthrough(record, entry.ref)
            if result is _SKIP:
                continue
            return result

        coordinates = _resolve_coordinates(record, entry)
        if coordinates is _SKIP:
            continue
        if coordinates is ABSENT:
            logger.debug(f"Unresolved {entry.kind.value} path for record keys {list(record)}")
            return ABSENT
        if coordinates is None:
            return None
        return {"type": entry.kind.value, "coordinates": coordinates}

    return None


def is_valid_geometry(geometry: Any, predicate: Optional[GeometryPredicate] = None) -> bool:
    """
    Structural check: a mapping with a non-empty `type` and non-empty `coordinates`.

    `predicate`, when given, must also accept the geometry.
    """
    if not isinstance(geometry, Mapping):
        return False
    if not geometry.get("type"):
        return False

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) == 0:
        return False

    if predicate is not None:
        return bool(predicate(geometry))
    return True


def shapely_is_valid(geometry: Mapping[str, Any]) -> bool:
    """
    Predicate for `isGeometryValid`: the geometry builds a topologically valid shapely object.
    """
    try:
        return bool(shape(geometry).is_valid)
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError, AttributeError):
        return False
