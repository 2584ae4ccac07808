# src/geojsonify/services/features.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from geojsonify.config.logging import get_logger
from geojsonify.errors import InvalidGeometryError
from geojsonify.geo.geometry import ABSENT, is_valid_geometry, resolve_geometry
from geojsonify.geo.geometry_spec import GeometrySpec
from geojsonify.geo.serialization import feature
from geojsonify.services.options import ParseOptions
from geojsonify.services.properties import select_properties

logger = get_logger(__name__)


def build_feature(
    record: Mapping[str, Any],
    spec: GeometrySpec,
    options: ParseOptions,
    *,
    settings: Optional[Mapping[str, Any]] = None,
) -> Optional[dict[str, Any]]:
    """
    Feature for one record, or None when its geometry is invalid and
    `removeInvalidGeometries` is set.

    With `doThrows.invalidGeometry` an invalid geometry raises InvalidGeometryError
    carrying the record and `settings`.
    """
    geometry: Any = resolve_geometry(record, spec)

    if not is_valid_geometry(geometry, options.is_geometry_valid):
        if options.do_throws.invalid_geometry:
            logger.warning(f"Invalid geometry for record keys {list(record)}")
            raise InvalidGeometryError(record, settings)
        if options.remove_invalid_geometries:
            return None
        # nested path miss is reported as False, anything else as null
        geometry = False if geometry is ABSENT else None
    elif options.is_postgres and options.crs is not None:
        geometry = {**geometry, "crs": dict(options.crs)}

    properties = select_properties(record, spec.fields, options)
    return feature(geometry, properties)
