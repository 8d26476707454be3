"""Forecast pipeline: resolve -> select -> fetch -> extract, in strict sequence."""

import logging
import time

from skycast.config.schema import SkycastConfig
from skycast.errors import UserInputError
from skycast.extract.engine import ExtractionEngine
from skycast.ingest.location_client import LocationResolver
from skycast.ingest.page_client import ForecastPageClient
from skycast.models.common import utc_now_iso
from skycast.models.forecast import Diagnostic, ForecastReport
from skycast.models.place import Place

logger = logging.getLogger(__name__)


class ForecastPipeline:
    """One instance per host; holds config only, no per-run state."""

    def __init__(
        self,
        config: SkycastConfig | None = None,
        resolver: LocationResolver | None = None,
        page_client: ForecastPageClient | None = None,
        engine: ExtractionEngine | None = None,
    ):
        self.config = config or SkycastConfig()
        self.resolver = resolver or LocationResolver(self.config.endpoints, self.config.http)
        self.page_client = page_client or ForecastPageClient(
            self.config.endpoints, self.config.http
        )
        self.engine = engine or ExtractionEngine.from_config(self.config.extraction)

    def locate(self, query: str) -> list[Place]:
        """Resolve a query to candidate places. Blank queries are rejected."""
        if not query or not query.strip():
            raise UserInputError("Please provide a city or zip code.")
        return self.resolver.resolve(query.strip())

    def choices(self, places: list[Place]) -> list[Place]:
        """The candidates offered for selection."""
        return places[: self.config.display.max_choices]

    def forecast(
        self, place: Place, diagnostics: list[Diagnostic] | None = None
    ) -> ForecastReport:
        markup = self.page_client.fetch(place.place_id)
        result = self.engine.extract(markup, diagnostics)
        return ForecastReport(
            place=place,
            fetched_at=utc_now_iso(),
            today=result.today,
            outlook=result.outlook,
        )

    def run(
        self,
        query: str,
        choice: int = 1,
        diagnostics: list[Diagnostic] | None = None,
    ) -> ForecastReport:
        """Run the whole pipeline, picking the ``choice``-th (1-based) candidate."""
        start_time = time.monotonic()
        places = self.locate(query)
        if not places:
            raise UserInputError(f"No places found for {query!r}")
        offered = self.choices(places)
        if not 1 <= choice <= len(offered):
            raise UserInputError(
                f"Choice {choice} out of range, {len(offered)} candidates offered"
            )
        place = offered[choice - 1]
        logger.info("Selected %s (%s)", place.display_name, place.place_id)

        report = self.forecast(place, diagnostics)
        logger.info(
            "Forecast for %s complete in %.2fs",
            place.display_name, time.monotonic() - start_time,
        )
        return report
