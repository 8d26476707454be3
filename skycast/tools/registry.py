"""Schema-typed tools exposing the pipeline to a tool-calling model.

Each tool has a pydantic argument model (its JSON schema is what the
model sees) and a handler returning JSON-serializable data.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from skycast.calendar.client import CalendarClient
from skycast.calendar.events import build_event_body
from skycast.errors import UserInputError
from skycast.models.place import Place
from skycast.pipeline.forecast_pipeline import ForecastPipeline

logger = logging.getLogger(__name__)


class LocationFetcherArgs(BaseModel):
    model_config = {"extra": "forbid"}

    query: str = Field(description="City name or ZIP code")


class WeatherFetcherArgs(BaseModel):
    model_config = {"extra": "forbid", "populate_by_name": True}

    place_id: str = Field(alias="placeId", description="placeId from location_fetcher")


class CalendarEventArgs(BaseModel):
    model_config = {"extra": "forbid", "populate_by_name": True}

    title: str
    description: str
    start: str = Field(description="ISO-8601 date-time, or YYYY-MM-DD for all-day events")
    end: str = Field(description="ISO-8601 date-time, or YYYY-MM-DD for all-day events")
    all_day: bool | None = Field(default=None, alias="allDay")


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Callable[[Any], Any]

    def schema(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.args_model.model_json_schema(by_alias=True),
            },
        }


class ToolRegistry:
    def __init__(
        self,
        pipeline: ForecastPipeline,
        calendar_factory: Callable[[], CalendarClient] | None = None,
    ):
        self.pipeline = pipeline
        self._calendar_factory = calendar_factory or (
            lambda: CalendarClient(config=pipeline.config.calendar, http=pipeline.config.http)
        )
        self._tools = {
            t.name: t
            for t in [
                Tool(
                    "location_fetcher",
                    "Retrieve a list of possible places for a city name or ZIP code, "
                    "with the placeId used to fetch their weather.",
                    LocationFetcherArgs,
                    self._fetch_locations,
                ),
                Tool(
                    "weather_fetcher",
                    "Retrieve today's weather by day segment plus the next days' "
                    "outlook for a placeId. Temperatures are in Fahrenheit, speeds in mph.",
                    WeatherFetcherArgs,
                    self._fetch_weather,
                ),
                Tool(
                    "calendar_event_creator",
                    "Create a calendar event summarising a weather forecast. "
                    "For all-day events, provide dates as YYYY-MM-DD with an exclusive "
                    "end date; timed events must last at least 30 minutes.",
                    CalendarEventArgs,
                    self._create_event,
                ),
            ]
        }

    def names(self) -> list[str]:
        return list(self._tools)

    def schemas(self) -> list[dict]:
        return [t.schema() for t in self._tools.values()]

    def call(self, name: str, arguments: dict | str) -> Any:
        """Validate ``arguments`` against the tool's schema and run it."""
        tool = self._tools.get(name)
        if tool is None:
            raise UserInputError(f"Unknown tool: {name}")
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments or "{}")
            except json.JSONDecodeError as e:
                raise UserInputError(f"Arguments for {name} are not valid JSON") from e
        try:
            args = tool.args_model.model_validate(arguments)
        except ValidationError as e:
            raise UserInputError(f"Invalid arguments for {name}: {e}") from e
        logger.info("Tool call %s", name)
        return tool.handler(args)

    def _fetch_locations(self, args: LocationFetcherArgs) -> list[dict]:
        return [p.to_dict() for p in self.pipeline.locate(args.query)]

    def _fetch_weather(self, args: WeatherFetcherArgs) -> dict:
        place = Place(place_id=args.place_id, display_name=args.place_id)
        return self.pipeline.forecast(place).to_dict()

    def _create_event(self, args: CalendarEventArgs) -> dict:
        event = build_event_body(
            args.title, args.description, args.start, args.end, bool(args.all_day)
        )
        return self._calendar_factory().insert_event(event)
