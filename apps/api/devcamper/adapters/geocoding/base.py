"""Geocoding provider interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class GeocodingError(Exception):
    """Raised when the geocoding provider cannot be reached or answers badly."""


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    latitude: float
    longitude: float
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country_code: str | None = None


class Geocoder(ABC):
    """Provider-neutral forward geocoding interface."""

    @abstractmethod
    def geocode(self, query: str) -> list[GeocodeResult]:
        """Resolve free-form address text; an empty list means no match."""


__all__ = ["GeocodeResult", "Geocoder", "GeocodingError"]
