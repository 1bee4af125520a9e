"""MapQuest geocoding adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from devcamper.adapters.geocoding.base import GeocodeResult, Geocoder, GeocodingError

logger = logging.getLogger(__name__)


class MapQuestGeocoder(Geocoder):
    """Calls the MapQuest ``geocoding/v1/address`` endpoint."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = "https://www.mapquestapi.com/geocoding/v1/address",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def geocode(self, query: str) -> list[GeocodeResult]:
        if not self._api_key:
            raise GeocodingError("Geocoder API key is not configured")

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.get(self._base_url, params={"key": self._api_key, "location": query})
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("geocoder.request_failed provider=mapquest error=%s", type(exc).__name__)
            raise GeocodingError("Geocoding request failed") from exc

        results = self._parse(payload)
        logger.debug("geocoder.resolved provider=mapquest matches=%d", len(results))
        return results

    @staticmethod
    def _parse(payload: dict[str, Any]) -> list[GeocodeResult]:
        status_code = payload.get("info", {}).get("statuscode", 0)
        if status_code != 0:
            raise GeocodingError(f"Geocoder returned status {status_code}")

        results: list[GeocodeResult] = []
        for result in payload.get("results") or []:
            for location in result.get("locations") or []:
                lat_lng = location.get("latLng") or location.get("displayLatLng") or {}
                if "lat" not in lat_lng or "lng" not in lat_lng:
                    continue
                street = location.get("street") or None
                city = location.get("adminArea5") or None
                state = location.get("adminArea3") or None
                zipcode = location.get("postalCode") or None
                country = location.get("adminArea1") or None
                formatted = ", ".join(part for part in (street, city, state, zipcode, country) if part)
                results.append(
                    GeocodeResult(
                        latitude=float(lat_lng["lat"]),
                        longitude=float(lat_lng["lng"]),
                        formatted_address=formatted or None,
                        street=street,
                        city=city,
                        state=state,
                        zipcode=zipcode,
                        country_code=country,
                    )
                )
        return results


__all__ = ["MapQuestGeocoder"]
