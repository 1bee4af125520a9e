"""Radius query translation and spherical distance helpers."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

from devcamper.adapters.geocoding import Geocoder
from devcamper.errors import NotFoundError, ValidationFailedError

EARTH_RADIUS_MILES = 3963.0
LOCATION_FIELD = "location"


@dataclass(frozen=True, slots=True)
class GeoQuery:
    """Spherical cap centred on a point; ``radius`` is in radians."""

    longitude: float
    latitude: float
    radius: float
    field: str = LOCATION_FIELD

    @property
    def center(self) -> tuple[float, float]:
        return (self.longitude, self.latitude)

    def as_filter(self) -> dict[str, Any]:
        return {
            self.field: {
                "$geoWithin": {
                    "$centerSphere": [[self.longitude, self.latitude], self.radius],
                }
            }
        }


def miles_to_radians(distance_miles: float) -> float:
    return distance_miles / EARTH_RADIUS_MILES


def translate_radius(postal_code: str, distance_miles: float, geocoder: Geocoder) -> GeoQuery:
    """Resolve a postal code and distance into a spherical-cap query."""
    if distance_miles < 0:
        raise ValidationFailedError("Distance must not be negative", details={"distance": distance_miles})

    results = geocoder.geocode(postal_code)
    if not results:
        raise NotFoundError(f"No location found for zipcode {postal_code}", details={"zipcode": postal_code})

    # First match only.
    first = results[0]
    return GeoQuery(
        longitude=first.longitude,
        latitude=first.latitude,
        radius=miles_to_radians(distance_miles),
    )


def angular_distance(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """Great-circle distance in radians between two ``(lng, lat)`` points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng2 - lng1)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(h)))


def point_within_sphere(point: Any, center: Any, radius: float) -> bool:
    """Evaluate ``$centerSphere`` against a GeoJSON point or ``[lng, lat]`` pair."""
    coordinates = point.get("coordinates") if isinstance(point, dict) else point
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 2:
        return False
    lng, lat = coordinates
    center_lng, center_lat = center
    return angular_distance(float(center_lng), float(center_lat), float(lng), float(lat)) <= radius
