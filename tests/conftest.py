import os

import pytest

from geojsonify.config.settings import get_settings
from geojsonify.services.parse import reset_defaults


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """No env overrides, fresh settings cache and empty defaults for every test."""
    for key in list(os.environ):
        if key.startswith("GEOJSONIFY_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    reset_defaults()
    yield
    reset_defaults()
    get_settings.cache_clear()


@pytest.fixture
def locations():
    return [
        {"name": "Location A", "category": "Store", "lat": 39.984, "lng": -75.343, "street": "Market"},
        {"name": "Location B", "category": "House", "lat": 39.284, "lng": -75.833, "street": "Broad"},
        {"name": "Location C", "category": "Office", "lat": 39.123, "lng": -74.534, "street": "South"},
    ]
