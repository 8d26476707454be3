"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, field_validator

from skycast.extract.selectors import DEFAULT_CATALOG
from skycast.models.common import OutputFormat


class EndpointConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location_url: str = "https://weather.com/api/v1/p/redux-dal"
    search_operation: str = "getSunV3LocationSearchUrlConfig"
    language: str = "en-US"
    location_type: str = "locale"
    forecast_url: str = "https://weather.com/weather/today/l"


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=30.0, gt=0.0)
    user_agent: str = "skycast/0.1.0"


class ExtractionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    outlook_horizon: int = Field(default=2, ge=0, le=14)
    selector_overrides: dict[str, str] = {}

    @field_validator("selector_overrides")
    @classmethod
    def _known_fields(cls, value: dict[str, str]) -> dict[str, str]:
        unknown = sorted(set(value) - set(DEFAULT_CATALOG.names()))
        if unknown:
            raise ValueError(f"Unknown selector fields: {', '.join(unknown)}")
        for name, css in value.items():
            DEFAULT_CATALOG.check_override(name, css)
        return value


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_choices: int = Field(default=3, ge=1)
    output_format: OutputFormat = OutputFormat.TEXT


class CalendarConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_base: str = "https://www.googleapis.com/calendar/v3"
    calendar_id: str = "primary"
    token_env: str = "GOOGLE_CALENDAR_TOKEN"


class SkycastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    endpoints: EndpointConfig = EndpointConfig()
    http: HttpConfig = HttpConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    display: DisplayConfig = DisplayConfig()
    calendar: CalendarConfig = CalendarConfig()
