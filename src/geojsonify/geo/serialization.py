# src/geojsonify/geo/serialization.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


def feature(geometry: Any, properties: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": geometry,
        "properties": dict(properties),
    }


def feature_collection(
    features: Iterable[dict[str, Any]],
    *,
    crs: Optional[Mapping[str, Any]] = None,
    bbox: Any = None,
    properties: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    out: dict[str, Any] = {
        "type": "FeatureCollection",
        "features": list(features),
    }
    if crs is not None:
        out["crs"] = crs
    if bbox is not None:
        out["bbox"] = bbox
    if properties is not None:
        out["properties"] = dict(properties)
    return out
