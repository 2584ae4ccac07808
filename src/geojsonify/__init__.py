from geojsonify.errors import ConfigurationError, GeoJSONError, InvalidGeometryError
from geojsonify.geo.geometry import ABSENT, shapely_is_valid
from geojsonify.services.parse import GeoJSONConverter, get_defaults, parse, reset_defaults, set_defaults

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "ConfigurationError",
    "GeoJSONConverter",
    "GeoJSONError",
    "InvalidGeometryError",
    "get_defaults",
    "parse",
    "reset_defaults",
    "set_defaults",
    "shapely_is_valid",
]
