"""Calendar event construction from forecast reports."""

from datetime import date, datetime, timedelta

from skycast.errors import UserInputError
from skycast.models.forecast import ForecastReport

# Google rejects timed events shorter than this
MIN_TIMED_EVENT = timedelta(minutes=30)


def _parse_datetime(value: str, field: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise UserInputError(f"{field} is not an ISO-8601 date-time: {value!r}") from None


def _parse_date(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise UserInputError(f"{field} is not a YYYY-MM-DD date: {value!r}") from None


def build_event_body(
    title: str,
    description: str,
    start: str,
    end: str,
    all_day: bool = False,
) -> dict:
    """Build an events.insert request body.

    All-day events take ``YYYY-MM-DD`` dates; timed events take ISO-8601
    date-times at least 30 minutes apart.
    """
    if not title.strip():
        raise UserInputError("Event title must not be empty")
    event: dict = {"summary": title, "description": description}
    if all_day:
        start_d = _parse_date(start, "start")
        end_d = _parse_date(end, "end")
        # all-day end dates are exclusive
        if end_d <= start_d:
            raise UserInputError("Event end date must be after start date")
        event["start"] = {"date": start_d.isoformat()}
        event["end"] = {"date": end_d.isoformat()}
    else:
        start_dt = _parse_datetime(start, "start")
        end_dt = _parse_datetime(end, "end")
        if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
            raise UserInputError("start and end must both carry a UTC offset or neither")
        if end_dt - start_dt < MIN_TIMED_EVENT:
            raise UserInputError("Timed events must last at least 30 minutes")
        event["start"] = {"dateTime": start}
        event["end"] = {"dateTime": end}
    return event


def forecast_summary(report: ForecastReport) -> str:
    today = report.today
    condition = today.current.condition
    if condition is None and today.active_segment is not None:
        condition = today.segments[today.active_segment].condition
    parts = []
    if today.temp_high_f is not None or today.temp_low_f is not None:
        high = today.temp_high_f if today.temp_high_f is not None else "--"
        low = today.temp_low_f if today.temp_low_f is not None else "--"
        parts.append(f"High {high}°F / Low {low}°F")
    if condition:
        parts.append(condition)
    return ", ".join(parts) or "Forecast unavailable"


def build_forecast_event(report: ForecastReport, day: date | None = None) -> dict:
    """All-day event summarising today's forecast for the report's place."""
    day = day or date.today()
    lines = [forecast_summary(report)]
    for outlook_day in report.outlook:
        lines.append(
            f"{outlook_day.date_label or '--'}: "
            f"{outlook_day.temp_high_f if outlook_day.temp_high_f is not None else '--'}°F / "
            f"{outlook_day.temp_low_f if outlook_day.temp_low_f is not None else '--'}°F, "
            f"{outlook_day.condition or '--'}"
        )
    return build_event_body(
        title=f"Weather: {report.place.display_name}",
        description="\n".join(lines),
        start=day.isoformat(),
        end=(day + timedelta(days=1)).isoformat(),
        all_day=True,
    )
