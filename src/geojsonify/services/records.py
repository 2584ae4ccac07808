# src/geojsonify/services/records.py
from __future__ import annotations

from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from geojsonify.errors import ConfigurationError


def sanitize_value(v: Any) -> Any:
    """
    Convert pandas/numpy values into plain Python equivalents.

    NaN / NA become None, numpy scalars become Python scalars, containers are
    sanitized recursively. Geometry objects are left untouched.
    """
    if v is None:
        return None

    if hasattr(v, "__geo_interface__"):
        return v

    # pandas NA / numpy NaN
    if v is pd.NA or (pd.api.types.is_scalar(v) and pd.isna(v)):
        return None

    # numpy scalar -> python scalar
    if isinstance(v, np.bool_):
        return bool(v)
    if isinstance(v, np.integer):
        return int(v)
    if isinstance(v, np.floating):
        return float(v)

    if isinstance(v, np.ndarray):
        v = v.tolist()

    # containers: sanitize recursively
    if isinstance(v, Mapping):
        return {k: sanitize_value(val) for k, val in v.items()}
    if isinstance(v, (list, tuple)):
        return [sanitize_value(x) for x in v]

    return v


def records_from_dataframe(df: pd.DataFrame) -> list[dict[str, Any]]:
    """
    One record per row. Column names become field names; a GeoDataFrame's
    geometry column keeps its shapely objects for the GeoJSON passthrough.
    """
    rows = df.to_dict(orient="records")
    return [{str(k): sanitize_value(v) for k, v in row.items()} for row in rows]


def collect_records(records: Iterable[Any]) -> list[Mapping[str, Any]]:
    """Materialize a record iterable, rejecting anything that is not a mapping."""
    if isinstance(records, pd.DataFrame):
        return records_from_dataframe(records)

    out = list(records)
    for i, record in enumerate(out):
        if not isinstance(record, Mapping):
            raise ConfigurationError(f"Record {i} is not a mapping: {type(record).__name__}")
    return out
