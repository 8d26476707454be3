"""Location search client: free-text query -> ordered candidate places."""

import logging

import httpx

from skycast.config.schema import EndpointConfig, HttpConfig
from skycast.errors import AmbiguousEnvelopeError, EnvelopeDecodeError, NetworkError
from skycast.models.place import Place

logger = logging.getLogger(__name__)

ENVELOPE_ROOT = "dal"


class LocationResolver:
    def __init__(
        self,
        endpoints: EndpointConfig | None = None,
        http: HttpConfig | None = None,
    ):
        self.endpoints = endpoints or EndpointConfig()
        self.http = http or HttpConfig()

    def resolve(self, query: str) -> list[Place]:
        """Search for places matching ``query``, in the order the service returns them."""
        payload = [
            {
                "name": self.endpoints.search_operation,
                "params": {
                    "query": query,
                    "language": self.endpoints.language,
                    "locationType": self.endpoints.location_type,
                },
            }
        ]
        url = self.endpoints.location_url
        try:
            resp = httpx.post(
                url,
                json=payload,
                headers={"User-Agent": self.http.user_agent},
                timeout=self.http.timeout_seconds,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Location search %s returned %d", url, e.response.status_code)
            raise NetworkError(
                f"Location search failed: HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("Location search request failed: %s", e)
            raise NetworkError(f"Location search request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise EnvelopeDecodeError("Location search response is not JSON") from e

        places = decode_locations(body, self.endpoints.search_operation)
        logger.info("Location search %r returned %d places", query, len(places))
        return places


def unwrap_envelope(body: dict, operation: str) -> dict:
    """Return the single result object under ``dal.<operation>``.

    The key under the operation namespace is generated by the service and
    is read rather than hard-coded. More than one key is an upstream
    contract change and raises AmbiguousEnvelopeError.
    """
    namespace = f"{ENVELOPE_ROOT}.{operation}"
    try:
        results = body[ENVELOPE_ROOT][operation]
    except (KeyError, TypeError) as e:
        raise EnvelopeDecodeError(f"Missing namespace {namespace!r}") from e
    if not isinstance(results, dict) or not results:
        raise EnvelopeDecodeError(f"No result key under {namespace!r}")
    keys = list(results)
    if len(keys) > 1:
        raise AmbiguousEnvelopeError(namespace, keys)
    result = results[keys[0]]
    if not isinstance(result, dict):
        raise EnvelopeDecodeError(f"Result under {namespace!r} is not an object")
    return result


def decode_locations(body: dict, operation: str) -> list[Place]:
    """Zip the parallel location arrays into Place records, keeping source order."""
    result = unwrap_envelope(body, operation)
    location = (result.get("data") or {}).get("location") or {}
    place_ids = location.get("placeId")
    if not place_ids:
        return []

    cities = location.get("city") or []
    districts = location.get("adminDistrict") or []
    countries = location.get("country") or []

    places = []
    for i, place_id in enumerate(place_ids):
        parts = [
            _at(cities, i),
            _at(districts, i),
            _at(countries, i),
        ]
        display = ", ".join(p for p in parts if p)
        places.append(Place(place_id=place_id, display_name=display))
    return places


def _at(values: list, index: int) -> str | None:
    return values[index] if index < len(values) else None
