from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Environment-level configuration for geojsonify.

    Reads env vars with prefix GEOJSONIFY_ and also loads from .env automatically.
    Values here sit below both the converter defaults and the per-call params.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEOJSONIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------
    # Logging
    # -------------------------
    log_level: str = "WARNING"

    # -------------------------
    # Parse behavior
    # -------------------------
    default_crs: Optional[str] = Field(
        default=None,
        description="CRS name attached to every output unless params or defaults set `crs`.",
        examples=["urn:ogc:def:crs:OGC:1.3:CRS84", "EPSG:4326"],
    )
    remove_invalid_geometries: bool = False

    def as_params(self) -> dict[str, Any]:
        """Settings expressed as parse params, lowest priority in the merge."""
        out: dict[str, Any] = {}
        if self.default_crs:
            out["crs"] = self.default_crs
        if self.remove_invalid_geometries:
            out["removeInvalidGeometries"] = True
        return out


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
