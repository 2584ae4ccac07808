# src/geojsonify/services/parse.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

from geojsonify.config.logging import get_logger
from geojsonify.config.settings import get_settings
from geojsonify.errors import ConfigurationError
from geojsonify.geo.geometry_spec import GeometrySpec
from geojsonify.geo.serialization import feature_collection
from geojsonify.services.features import build_feature
from geojsonify.services.options import ParseOptions, merge_settings, normalize_settings
from geojsonify.services.records import collect_records

logger = get_logger(__name__)


class GeoJSONConverter:
    """
    Converts records into GeoJSON.

    `defaults` is caller-owned: it is merged under the params of every call
    (params win) and stays in place until the caller changes or resets it.
    Everything else a call needs is built locally, so one converter can be
    shared between callers.
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        self.defaults: dict[str, Any] = dict(defaults or {})

    def settings_for(self, params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        """Effective settings: params over converter defaults over environment settings."""
        return merge_settings(params, dict(self.defaults), get_settings().as_params())

    def parse(
        self,
        records: Mapping[str, Any] | Iterable[Mapping[str, Any]],
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callable[[Any], Any]] = None,
    ) -> Optional[dict[str, Any]]:
        """
        A FeatureCollection for a list of records, a single Feature for one mapping.

        When `callback` is callable it receives the result and None is returned.
        """
        settings = self.settings_for(params)
        spec, options = normalize_settings(settings)

        if isinstance(records, Mapping):
            result = self._parse_one(records, spec, options, settings)
        elif isinstance(records, (str, bytes)) or not isinstance(records, Iterable):
            raise ConfigurationError(
                f"Records must be a mapping or an iterable of mappings, got {type(records).__name__}"
            )
        else:
            result = self._parse_many(collect_records(records), spec, options, settings)

        if callable(callback):
            callback(result)
            return None
        return result

    def _parse_many(
        self,
        records: list[Mapping[str, Any]],
        spec: GeometrySpec,
        options: ParseOptions,
        settings: Mapping[str, Any],
    ) -> dict[str, Any]:
        features = []
        for record in records:
            feat = build_feature(record, spec, options, settings=settings)
            if feat is not None:
                features.append(feat)

        dropped = len(records) - len(features)
        if dropped:
            logger.info(f"Dropped {dropped} records with invalid geometries")
        logger.debug(f"Parsed {len(records)} records into {len(features)} features")

        return feature_collection(
            features,
            crs=None if options.is_postgres else options.crs,
            bbox=options.bbox,
            properties=options.extra_global,
        )

    def _parse_one(
        self,
        record: Mapping[str, Any],
        spec: GeometrySpec,
        options: ParseOptions,
        settings: Mapping[str, Any],
    ) -> Optional[dict[str, Any]]:
        feat = build_feature(record, spec, options, settings=settings)
        if feat is None:
            logger.info("Dropped the only record: invalid geometry")
            return None

        if options.crs is not None and not options.is_postgres:
            feat["crs"] = options.crs
        if options.bbox is not None:
            feat["bbox"] = options.bbox
        if options.extra_global is not None:
            logger.debug("extraGlobal ignored for single Feature output")
        return feat


_converter = GeoJSONConverter()


def parse(
    records: Mapping[str, Any] | Iterable[Mapping[str, Any]],
    params: Optional[Mapping[str, Any]] = None,
    callback: Optional[Callable[[Any], Any]] = None,
) -> Optional[dict[str, Any]]:
    return _converter.parse(records, params, callback)


def get_defaults() -> dict[str, Any]:
    """The process-wide defaults mapping; mutations apply to later parse() calls."""
    return _converter.defaults


def set_defaults(defaults: Mapping[str, Any]) -> None:
    _converter.defaults = dict(defaults)


def reset_defaults() -> None:
    _converter.defaults = {}
