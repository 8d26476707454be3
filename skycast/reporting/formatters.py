"""Output formatters for places and forecast reports."""

import json

from skycast.models.common import SEGMENT_ORDER
from skycast.models.forecast import ForecastReport
from skycast.models.place import Place


def _temp(value: int | None) -> str:
    return f"{value}°F" if value is not None else "--"


def _text(value: str | None) -> str:
    return value if value is not None else "--"


def format_places_text(places: list[Place]) -> str:
    """Numbered candidate list for selection."""
    if not places:
        return "No matching places."
    return "\n".join(
        f"{i}. {p.display_name} [{p.place_id}]" for i, p in enumerate(places, start=1)
    )


def format_forecast_text(report: ForecastReport) -> str:
    """Plain text forecast for the console."""
    today = report.today
    current = today.current
    lines = [
        f"=== {report.place.display_name} ===",
        f"Now: {_temp(current.temperature_f)} {_text(current.condition)} "
        f"(feels like {_temp(current.felt_temperature_f)}) {_text(current.time_label)}",
        f"High/Low: {_temp(today.temp_high_f)} / {_temp(today.temp_low_f)} | "
        f"Humidity: {_text(current.humidity_percent)} | "
        f"UV: {_text(current.uv_index)} | Wind: {_text(current.wind_description)}",
    ]
    for name in SEGMENT_ORDER:
        seg = today.segments[name]
        marker = "*" if name == today.active_segment else " "
        lines.append(
            f"{marker} {name.value.capitalize():<10} {_temp(seg.temperature_f):>6}  "
            f"{_text(seg.condition)}, rain {_text(seg.chance_of_rain_percent)}"
        )
    if report.outlook:
        lines.append("Next days:")
        for day in report.outlook:
            lines.append(
                f"  {_text(day.date_label):<10} {_temp(day.temp_high_f)} / "
                f"{_temp(day.temp_low_f)}  {_text(day.condition)}, "
                f"rain {_text(day.chance_of_rain_percent)}"
            )
    return "\n".join(lines)


def format_forecast_json(report: ForecastReport) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
