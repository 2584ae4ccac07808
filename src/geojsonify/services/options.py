# src/geojsonify/services/options.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geojsonify.errors import ConfigurationError
from geojsonify.geo.crs import normalize_crs
from geojsonify.geo.geometry_spec import GEOMETRY_KEYS, GeometrySpec, normalize_geometry_spec


class DoThrows(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    invalid_geometry: bool = Field(default=False, alias="invalidGeometry")


class ParseOptions(BaseModel):
    """
    Every non-geometry option of a parse call.

    Accepts the camelCase keys used in params mappings as well as snake_case names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # -------------------------
    # Feature properties
    # -------------------------
    include: Optional[list[str]] = None
    exclude: Optional[list[str]] = None
    extra: Optional[dict[str, Any]] = None

    # -------------------------
    # Output envelope
    # -------------------------
    extra_global: Optional[dict[str, Any]] = Field(default=None, alias="extraGlobal")
    crs: Optional[dict[str, Any]] = None
    bbox: Any = None
    is_postgres: bool = Field(default=False, alias="isPostgres")

    # -------------------------
    # Invalid geometry policy
    # -------------------------
    do_throws: DoThrows = Field(default_factory=DoThrows, alias="doThrows")
    remove_invalid_geometries: bool = Field(default=False, alias="removeInvalidGeometries")
    is_geometry_valid: Optional[Callable[[Mapping[str, Any]], bool]] = Field(
        default=None, alias="isGeometryValid"
    )

    @field_validator("crs", mode="before")
    @classmethod
    def _validate_crs(cls, value: Any) -> Any:
        if value is None:
            return None
        return normalize_crs(value)


# snake_case name -> camelCase key, so both spellings merge as one setting
_CANONICAL_KEYS = {
    name: field.alias for name, field in ParseOptions.model_fields.items() if field.alias
}


def _canonical(params: Mapping[str, Any]) -> dict[str, Any]:
    return {_CANONICAL_KEYS.get(k, k): v for k, v in params.items() if v is not None}


def merge_settings(params: Optional[Mapping[str, Any]], *layers: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """
    Merge `params` over lower-priority layers without mutating any of them.

    A key set in a higher layer is never overwritten by a lower one; None counts as unset.
    Key order: params first, then keys added by each layer in turn.
    """
    if params is not None and not isinstance(params, Mapping):
        raise ConfigurationError(f"Params must be a mapping, got {type(params).__name__}")

    merged = _canonical(params or {})
    for layer in layers:
        for key, value in _canonical(layer or {}).items():
            if key not in merged:
                merged[key] = value
    return merged


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0]
    cause = err.get("ctx", {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    loc = ".".join(str(p) for p in err["loc"])
    return f"Invalid option {loc}: {err['msg']}"


def _option_items(settings: Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    return ((k, v) for k, v in settings.items() if k not in GEOMETRY_KEYS)


def normalize_settings(settings: Mapping[str, Any]) -> tuple[GeometrySpec, ParseOptions]:
    """
    Split merged settings into the geometry spec and the validated options.

    Raises ConfigurationError before any record is looked at.
    """
    spec = normalize_geometry_spec(settings)
    try:
        options = ParseOptions.model_validate(dict(_option_items(settings)))
    except ValidationError as exc:
        raise ConfigurationError(_validation_message(exc)) from None
    return spec, options
