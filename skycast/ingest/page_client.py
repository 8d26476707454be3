"""Forecast page client: fetches the today page markup for a place."""

import logging

import httpx

from skycast.config.schema import EndpointConfig, HttpConfig
from skycast.errors import NetworkError

logger = logging.getLogger(__name__)


class ForecastPageClient:
    def __init__(
        self,
        endpoints: EndpointConfig | None = None,
        http: HttpConfig | None = None,
    ):
        self.endpoints = endpoints or EndpointConfig()
        self.http = http or HttpConfig()

    def page_url(self, place_id: str) -> str:
        return f"{self.endpoints.forecast_url.rstrip('/')}/{place_id}"

    def fetch(self, place_id: str) -> str:
        """GET the today page for ``place_id`` and return its markup."""
        url = self.page_url(place_id)
        try:
            resp = httpx.get(
                url,
                headers={"User-Agent": self.http.user_agent, "Accept": "text/html"},
                timeout=self.http.timeout_seconds,
                follow_redirects=True,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Forecast page %s returned %d", url, e.response.status_code)
            raise NetworkError(
                f"Forecast page fetch failed: HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("Forecast page request failed for %s: %s", url, e)
            raise NetworkError(f"Forecast page request failed: {e}") from e
        return resp.text
