"""Tests for the location search client with mocked httpx."""

import json

import httpx
import pytest
import respx

from skycast.config.schema import EndpointConfig
from skycast.errors import AmbiguousEnvelopeError, EnvelopeDecodeError, NetworkError
from skycast.ingest.location_client import LocationResolver, decode_locations, unwrap_envelope

LOCATION_URL = "https://test-weather.example.com/api/v1/p/redux-dal"

OPERATION = "getSunV3LocationSearchUrlConfig"


@pytest.fixture
def resolver() -> LocationResolver:
    return LocationResolver(EndpointConfig(location_url=LOCATION_URL))


def _envelope(results: dict) -> dict:
    return {"dal": {OPERATION: results}}


class TestResolve:
    @respx.mock
    def test_single_city(self, resolver: LocationResolver, gary_search: dict):
        respx.post(LOCATION_URL).mock(return_value=httpx.Response(200, json=gary_search))

        places = resolver.resolve("Gary, Indiana")
        assert len(places) == 1
        assert places[0].display_name == "Gary, Indiana, United States"
        assert places[0].place_id.startswith("a8c2e11b")

    @respx.mock
    def test_request_payload(self, resolver: LocationResolver, gary_search: dict):
        route = respx.post(LOCATION_URL).mock(
            return_value=httpx.Response(200, json=gary_search)
        )

        resolver.resolve("Gary, Indiana")
        body = json.loads(route.calls[0].request.content)
        assert body == [
            {
                "name": OPERATION,
                "params": {
                    "query": "Gary, Indiana",
                    "language": "en-US",
                    "locationType": "locale",
                },
            }
        ]
        assert "skycast" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_preserves_source_order(
        self, resolver: LocationResolver, springfield_search: dict
    ):
        respx.post(LOCATION_URL).mock(
            return_value=httpx.Response(200, json=springfield_search)
        )

        places = resolver.resolve("Springfield")
        assert [p.place_id for p in places] == ["pid-il", "pid-mo", "pid-ma", "pid-or"]
        assert places[1].display_name == "Springfield, Missouri, United States"

    @respx.mock
    def test_server_error(self, resolver: LocationResolver):
        respx.post(LOCATION_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(NetworkError) as exc_info:
            resolver.resolve("Gary")
        assert exc_info.value.status_code == 503

    @respx.mock
    def test_transport_error(self, resolver: LocationResolver):
        respx.post(LOCATION_URL).mock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(NetworkError):
            resolver.resolve("Gary")

    @respx.mock
    def test_non_json_body(self, resolver: LocationResolver):
        respx.post(LOCATION_URL).mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(EnvelopeDecodeError):
            resolver.resolve("Gary")


class TestDecodeLocations:
    def test_no_place_ids_is_empty(self):
        body = _envelope({"k": {"data": {"location": {"city": []}}}})
        assert decode_locations(body, OPERATION) == []

    def test_null_data_is_empty(self):
        body = _envelope({"k": {"loading": False, "data": None}})
        assert decode_locations(body, OPERATION) == []

    def test_two_keys_is_ambiguous(self, gary_search: dict):
        results = gary_search["dal"][OPERATION]
        results["language:en-US;query:Gary;v2"] = next(iter(results.values()))
        with pytest.raises(AmbiguousEnvelopeError, match="found 2"):
            decode_locations(gary_search, OPERATION)

    def test_ambiguous_is_decode_error(self):
        body = _envelope({"a": {}, "b": {}})
        with pytest.raises(EnvelopeDecodeError):
            unwrap_envelope(body, OPERATION)

    def test_dynamic_key_is_read(self):
        body = _envelope({"whatever-the-service-says": {"data": {"location": {
            "placeId": ["p1"], "city": ["Paris"], "adminDistrict": ["Ile-de-France"],
            "country": ["France"],
        }}}})
        places = decode_locations(body, OPERATION)
        assert places[0].display_name == "Paris, Ile-de-France, France"

    def test_missing_namespace(self):
        with pytest.raises(EnvelopeDecodeError, match="Missing namespace"):
            unwrap_envelope({"dal": {}}, OPERATION)

    def test_empty_namespace(self):
        with pytest.raises(EnvelopeDecodeError, match="No result key"):
            unwrap_envelope(_envelope({}), OPERATION)

    def test_missing_parts_are_omitted(self):
        body = _envelope({"k": {"data": {"location": {
            "placeId": ["p1", "p2"], "city": ["Monaco", "Vaduz"],
            "adminDistrict": [None], "country": ["Monaco", "Liechtenstein"],
        }}}})
        places = decode_locations(body, OPERATION)
        assert places[0].display_name == "Monaco, Monaco"
        assert places[1].display_name == "Vaduz, Liechtenstein"
