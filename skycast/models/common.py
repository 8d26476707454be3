"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class Segment(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    OVERNIGHT = "overnight"


# Evaluation order for the active-segment tie-break; also the child row order
# of the today card.
SEGMENT_ORDER: tuple[Segment, ...] = (
    Segment.MORNING,
    Segment.AFTERNOON,
    Segment.EVENING,
    Segment.OVERNIGHT,
)


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
