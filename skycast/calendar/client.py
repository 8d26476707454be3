"""Calendar API client for inserting events.

Token acquisition (OAuth consent, refresh) is the host's job; this client
only takes a ready bearer token.
"""

import logging
import os

import httpx

from skycast.config.schema import CalendarConfig, HttpConfig
from skycast.errors import NetworkError, SkycastError

logger = logging.getLogger(__name__)


class CalendarClientError(SkycastError):
    """Raised when the calendar client is not usable."""


class CalendarClient:
    def __init__(
        self,
        access_token: str | None = None,
        config: CalendarConfig | None = None,
        http: HttpConfig | None = None,
    ):
        self.config = config or CalendarConfig()
        self.http = http or HttpConfig()
        self.access_token = access_token or os.environ.get(self.config.token_env, "")
        if not self.access_token:
            raise CalendarClientError(f"{self.config.token_env} not set")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "User-Agent": self.http.user_agent,
        }

    def insert_event(self, event: dict) -> dict:
        """Insert an event and return ``{"htmlLink": ...}``."""
        url = f"{self.config.api_base}/calendars/{self.config.calendar_id}/events"
        try:
            resp = httpx.post(
                url, headers=self._headers(), json=event, timeout=self.http.timeout_seconds
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Calendar API %d: %s", e.response.status_code, e.response.text
            )
            raise NetworkError(
                f"Calendar insert failed: HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("Calendar API request failed: %s", e)
            raise NetworkError(f"Calendar insert request failed: {e}") from e
        data = resp.json()
        logger.info("Created calendar event %s", data.get("id"))
        return {"htmlLink": data.get("htmlLink")}
