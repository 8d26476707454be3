"""Forecast data models produced by the extraction engine."""

from dataclasses import dataclass, field

from skycast.models.common import SEGMENT_ORDER, Segment
from skycast.models.place import Place


@dataclass(frozen=True)
class Diagnostic:
    """A structural lookup that matched nothing."""

    field: str
    selector: str


@dataclass(frozen=True)
class DaySegmentForecast:
    temperature_f: int | None = None
    condition: str | None = None
    chance_of_rain_percent: str | None = None
    is_active: bool = False

    def to_dict(self) -> dict:
        return {
            "temperatureF": self.temperature_f,
            "condition": self.condition,
            "chanceOfRainPercent": self.chance_of_rain_percent,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class CurrentConditions:
    time_label: str | None = None
    temperature_f: int | None = None
    felt_temperature_f: int | None = None
    condition: str | None = None
    humidity_percent: str | None = None
    uv_index: str | None = None
    wind_description: str | None = None

    def to_dict(self) -> dict:
        return {
            "timeLabel": self.time_label,
            "temperatureF": self.temperature_f,
            "feltTemperatureF": self.felt_temperature_f,
            "condition": self.condition,
            "humidityPercent": self.humidity_percent,
            "uvIndex": self.uv_index,
            "windDescription": self.wind_description,
        }


@dataclass(frozen=True)
class TodayForecast:
    temp_high_f: int | None = None
    temp_low_f: int | None = None
    current: CurrentConditions = field(default_factory=CurrentConditions)
    segments: dict[Segment, DaySegmentForecast] = field(
        default_factory=lambda: {s: DaySegmentForecast() for s in SEGMENT_ORDER}
    )
    active_segment: Segment | None = None

    def segment(self, name: Segment | str) -> DaySegmentForecast:
        return self.segments[Segment(name)]

    def to_dict(self) -> dict:
        return {
            "tempHighF": self.temp_high_f,
            "tempLowF": self.temp_low_f,
            "currentSnapshot": self.current.to_dict(),
            "segments": {
                str(s): self.segments[s].to_dict() for s in SEGMENT_ORDER
            },
            "activeSegment": str(self.active_segment) if self.active_segment else None,
        }


@dataclass(frozen=True)
class OutlookDay:
    date_label: str | None = None
    condition: str | None = None
    chance_of_rain_percent: str | None = None
    temp_high_f: int | None = None
    temp_low_f: int | None = None

    def to_dict(self) -> dict:
        return {
            "dateLabel": self.date_label,
            "condition": self.condition,
            "chanceOfRainPercent": self.chance_of_rain_percent,
            "tempHighF": self.temp_high_f,
            "tempLowF": self.temp_low_f,
        }


@dataclass(frozen=True)
class ForecastResult:
    today: TodayForecast
    outlook: list[OutlookDay]

    def to_dict(self) -> dict:
        return {
            "today": self.today.to_dict(),
            "outlook": [day.to_dict() for day in self.outlook],
        }


@dataclass(frozen=True)
class ForecastReport:
    """Extraction output bound to the place it was fetched for."""

    place: Place
    fetched_at: str
    today: TodayForecast
    outlook: list[OutlookDay]

    def to_dict(self) -> dict:
        return {
            "location": self.place.display_name,
            "placeId": self.place.place_id,
            "fetchedAt": self.fetched_at,
            "today": self.today.to_dict(),
            "outlook": [day.to_dict() for day in self.outlook],
        }
