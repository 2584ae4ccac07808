# src/geojsonify/geo/crs.py
from __future__ import annotations

import copy
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ValidationError

from geojsonify.errors import ConfigurationError

INVALID_CRS_TYPE = 'Invalid CRS. Type attribute must be "name" or "link"'
INVALID_NAMED_CRS = 'Invalid CRS. Properties must contain "name" key'
INVALID_LINKED_CRS = 'Invalid CRS. Properties must contain "href" and "type" key'


class NamedCrsProperties(BaseModel):
    name: str


class NamedCrs(BaseModel):
    type: Literal["name"]
    properties: NamedCrsProperties


class LinkedCrsProperties(BaseModel):
    href: str
    type: str


class LinkedCrs(BaseModel):
    type: Literal["link"]
    properties: LinkedCrsProperties


def named_crs(name: str) -> dict[str, Any]:
    return {"type": "name", "properties": {"name": name}}


def normalize_crs(value: str | Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate a crs descriptor and return the dict to attach to the output.

    A bare string is treated as the name of a "name"-typed crs.
    Mappings are checked against the two legal shapes and copied unchanged.
    """
    if isinstance(value, str):
        return named_crs(value)

    if not isinstance(value, Mapping):
        raise ConfigurationError(INVALID_CRS_TYPE)

    crs_type = value.get("type")
    if crs_type == "name":
        model, message = NamedCrs, INVALID_NAMED_CRS
    elif crs_type == "link":
        model, message = LinkedCrs, INVALID_LINKED_CRS
    else:
        raise ConfigurationError(INVALID_CRS_TYPE)

    try:
        model.model_validate(value)
    except ValidationError:
        raise ConfigurationError(message) from None

    return copy.deepcopy(dict(value))
