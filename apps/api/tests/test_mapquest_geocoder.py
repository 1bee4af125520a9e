"""MapQuest adapter tests against a mocked HTTP transport."""

from __future__ import annotations

import unittest

import httpx

from devcamper.adapters.geocoding import GeocodingError, MapQuestGeocoder

_BASE_URL = "https://www.mapquestapi.com/geocoding/v1/address"


def _payload(*locations: dict, status: int = 0) -> dict:
    return {"info": {"statuscode": status}, "results": [{"locations": list(locations)}]}


_BOSTON = {
    "street": "233 Bay State Rd",
    "adminArea5": "Boston",
    "adminArea3": "MA",
    "adminArea1": "US",
    "postalCode": "02215-1405",
    "latLng": {"lat": 42.350846, "lng": -71.10383},
}


class MapQuestGeocoderTests(unittest.TestCase):
    def _geocoder(self, handler, api_key: str | None = "mq-key") -> MapQuestGeocoder:
        return MapQuestGeocoder(api_key, base_url=_BASE_URL, timeout=2.0, transport=httpx.MockTransport(handler))

    def test_sends_key_and_location_and_parses_first_result(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_payload(_BOSTON))

        results = self._geocoder(handler).geocode("233 Bay State Rd Boston MA 02215")

        self.assertEqual(len(seen), 1)
        self.assertEqual(seen[0].url.params["key"], "mq-key")
        self.assertEqual(seen[0].url.params["location"], "233 Bay State Rd Boston MA 02215")
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual((result.latitude, result.longitude), (42.350846, -71.10383))
        self.assertEqual(result.city, "Boston")
        self.assertEqual(result.state, "MA")
        self.assertEqual(result.zipcode, "02215-1405")
        self.assertEqual(result.country_code, "US")
        self.assertEqual(result.formatted_address, "233 Bay State Rd, Boston, MA, 02215-1405, US")

    def test_locations_without_coordinates_are_skipped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_payload({"adminArea5": "Nowhere"}, _BOSTON))

        results = self._geocoder(handler).geocode("02215")

        self.assertEqual([r.city for r in results], ["Boston"])

    def test_empty_results_mean_no_match(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"info": {"statuscode": 0}, "results": []})

        self.assertEqual(self._geocoder(handler).geocode("00000"), [])

    def test_provider_status_and_http_failures_raise_geocoding_error(self) -> None:
        handlers = {
            "provider-status": lambda request: httpx.Response(200, json=_payload(status=403)),
            "http-error": lambda request: httpx.Response(500, text="boom"),
            "bad-json": lambda request: httpx.Response(200, text="not json"),
        }

        for name, handler in handlers.items():
            with self.subTest(case=name):
                with self.assertRaises(GeocodingError):
                    self._geocoder(handler).geocode("02215")

    def test_transport_error_raises_geocoding_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with self.assertRaises(GeocodingError):
            self._geocoder(handler).geocode("02215")

    def test_missing_api_key_fails_without_network(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_payload(_BOSTON))

        with self.assertRaises(GeocodingError):
            self._geocoder(handler, api_key=None).geocode("02215")
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()
