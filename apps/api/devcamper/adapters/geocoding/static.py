"""Static geocoder for local development and tests."""

from collections.abc import Mapping

from devcamper.adapters.geocoding.base import GeocodeResult, Geocoder


class StaticGeocoder(Geocoder):
    """Answers from a fixed table keyed by normalized query text."""

    def __init__(self, locations: Mapping[str, GeocodeResult | list[GeocodeResult]] | None = None) -> None:
        self._locations: dict[str, list[GeocodeResult]] = {}
        for query, value in (locations or {}).items():
            self._locations[self._key(query)] = list(value) if isinstance(value, list) else [value]
        self.queries: list[str] = []

    @staticmethod
    def _key(query: str) -> str:
        return " ".join(query.lower().split())

    def geocode(self, query: str) -> list[GeocodeResult]:
        self.queries.append(query)
        return list(self._locations.get(self._key(query), []))


__all__ = ["StaticGeocoder"]
