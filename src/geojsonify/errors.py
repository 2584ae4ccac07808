# src/geojsonify/errors.py
from __future__ import annotations

from typing import Any, Mapping, Optional


class GeoJSONError(ValueError):
    """Base class for every error raised by geojsonify."""


class ConfigurationError(GeoJSONError):
    """
    Raised before any record is processed when the parse settings are unusable:
    no geometry attributes, malformed geometry entries, malformed crs, bad option types.
    """


class InvalidGeometryError(GeoJSONError):
    """
    Raised mid-parse when `doThrows.invalidGeometry` is set and a record
    produced a geometry that failed the validity check.
    """

    def __init__(
        self,
        record: Mapping[str, Any],
        settings: Optional[Mapping[str, Any]] = None,
        message: str | None = None,
    ) -> None:
        self.record = record
        self.settings = dict(settings or {})
        super().__init__(message or f"Invalid Geometry: item: {record!r}")
