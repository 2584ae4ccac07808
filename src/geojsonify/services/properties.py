# src/geojsonify/services/properties.py
from __future__ import annotations

from typing import AbstractSet, Any, Mapping

from geojsonify.services.options import ParseOptions


def select_properties(
    record: Mapping[str, Any],
    geometry_fields: AbstractSet[str],
    options: ParseOptions,
) -> dict[str, Any]:
    """
    Properties of one feature.

      - include set: exactly those fields (geometry fields too), when present on the record
      - exclude set: every non-geometry field not listed
      - neither: every non-geometry field
    `extra` is merged last and wins over record fields.
    """
    if options.include is not None:
        properties = {name: record[name] for name in options.include if name in record}
    else:
        excluded = set(geometry_fields)
        if options.exclude is not None:
            excluded.update(options.exclude)
        properties = {k: v for k, v in record.items() if k not in excluded}

    if options.extra:
        properties.update(options.extra)

    return properties
