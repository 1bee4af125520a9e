"""Geocoding adapters."""

from .base import GeocodeResult, Geocoder, GeocodingError
from .mapquest import MapQuestGeocoder
from .static import StaticGeocoder

__all__ = [
    "GeocodeResult",
    "Geocoder",
    "GeocodingError",
    "MapQuestGeocoder",
    "StaticGeocoder",
]
