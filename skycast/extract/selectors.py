"""Selector catalog: where each forecast field lives in the today page.

Every structural lookup made by the extraction engine goes through this
table. Entries are scoped: ``scope`` names the catalog entry whose matched
node the selector is evaluated against (``None`` is the document root).
Row scopes (``segment_row``, ``outlook_row``) are supplied per row by the
engine; every other scope is a container found once per extraction.

``kind`` decides how a matched node is read and normalized; ``group`` and
``target`` name the model and attribute the value lands in.
"""

from dataclasses import dataclass, replace
from enum import StrEnum

POSITION_PLACEHOLDER = "{position}"


class FieldKind(StrEnum):
    CONTAINER = "container"
    ROW = "row"            # positional child row, css carries {position}
    ROWS = "rows"          # every matching row, in document order
    HIGH_LOW = "high_low"  # first node is the high, last node is the low
    TEMPERATURE = "temperature"
    LABEL = "label"
    PERCENTAGE = "percentage"
    INDICATOR = "indicator"


class FieldGroup(StrEnum):
    TODAY = "today"
    SEGMENT = "segment"
    CURRENT = "current"
    OUTLOOK = "outlook"


STRUCTURAL_KINDS = (FieldKind.CONTAINER, FieldKind.ROW, FieldKind.ROWS)


@dataclass(frozen=True)
class FieldSelector:
    name: str
    css: str
    kind: FieldKind
    scope: str | None = None
    group: FieldGroup | None = None
    target: str | None = None

    def render(self, **params) -> str:
        return self.css.format(**params) if params else self.css

    @property
    def is_structural(self) -> bool:
        return self.kind in STRUCTURAL_KINDS


# Shared leaf selectors
TEMPERATURE_VALUE = '[data-testid="TemperatureValue"]'
ICON_PHRASE = '[class*="Column--iconPhrase--"]'
PRECIP = '[class*="Column--precip--"]'


class SelectorCatalog:
    def __init__(self, entries: list[FieldSelector]):
        self._entries = {e.name: e for e in entries}

    def get(self, name: str) -> FieldSelector:
        return self._entries[name]

    def names(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[FieldSelector]:
        return list(self._entries.values())

    def fields(self, group: FieldGroup) -> list[FieldSelector]:
        """Value-producing entries of a group, in catalog order."""
        return [
            e for e in self._entries.values()
            if e.group == group and not e.is_structural
        ]

    def check_override(self, name: str, css: str) -> None:
        """Raise ValueError if ``css`` cannot stand in for entry ``name``."""
        entry = self._entries[name]
        if entry.kind == FieldKind.ROW and POSITION_PLACEHOLDER not in css:
            raise ValueError(f"Selector for {name} must contain {POSITION_PLACEHOLDER}")

    def with_overrides(self, overrides: dict[str, str]) -> "SelectorCatalog":
        """Return a copy with the CSS of the named entries replaced."""
        unknown = set(overrides) - set(self._entries)
        if unknown:
            raise KeyError(f"Unknown selector fields: {', '.join(sorted(unknown))}")
        for name, css in overrides.items():
            self.check_override(name, css)
        return self.replace_entries(
            **{name: {"css": css} for name, css in overrides.items()}
        )

    def replace_entries(self, **changes: dict) -> "SelectorCatalog":
        """Return a copy with attributes of the named entries replaced."""
        return SelectorCatalog([
            replace(e, **changes[e.name]) if e.name in changes else e
            for e in self._entries.values()
        ])

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_CATALOG = SelectorCatalog([
    # Containers
    FieldSelector("today_card", '[id^="WxuTodayWeatherCard-main-"]', FieldKind.CONTAINER),
    FieldSelector(
        "current_card", '[id^="WxuCurrentConditions-main-"]', FieldKind.CONTAINER
    ),
    FieldSelector("today_details", '[id^="WxuTodayDetails-main-"]', FieldKind.CONTAINER),
    FieldSelector(
        "outlook_table",
        '[data-testid="DailyWeatherModule"] [data-testid="WeatherTable"]',
        FieldKind.CONTAINER,
    ),

    # Day segments: 1st..4th child rows of the today card
    FieldSelector(
        "segment_row", "ul > li:nth-child({position})", FieldKind.ROW, "today_card",
        FieldGroup.SEGMENT,
    ),
    FieldSelector(
        "segment_temperature", TEMPERATURE_VALUE, FieldKind.TEMPERATURE, "segment_row",
        FieldGroup.SEGMENT, "temperature_f",
    ),
    FieldSelector(
        "segment_condition", ICON_PHRASE, FieldKind.LABEL, "segment_row",
        FieldGroup.SEGMENT, "condition",
    ),
    FieldSelector(
        "segment_rain", PRECIP, FieldKind.PERCENTAGE, "segment_row",
        FieldGroup.SEGMENT, "chance_of_rain_percent",
    ),
    FieldSelector(
        "active_indicator", '[class*="Column--active--"]', FieldKind.INDICATOR, "segment_row",
        FieldGroup.SEGMENT, "is_active",
    ),

    # Current snapshot
    FieldSelector(
        "current_time", '[class*="CurrentConditions--timestamp--"]',
        FieldKind.LABEL, "current_card", FieldGroup.CURRENT, "time_label",
    ),
    FieldSelector(
        "current_temperature", '[class*="CurrentConditions--tempValue--"]',
        FieldKind.TEMPERATURE, "current_card", FieldGroup.CURRENT, "temperature_f",
    ),
    FieldSelector(
        "feels_like", '[class*="TodayDetailsCard--feelsLikeTempValue--"]',
        FieldKind.TEMPERATURE, "today_details", FieldGroup.CURRENT, "felt_temperature_f",
    ),
    FieldSelector(
        "current_condition", '[data-testid="wxPhrase"]',
        FieldKind.LABEL, "current_card", FieldGroup.CURRENT, "condition",
    ),
    FieldSelector(
        "humidity", '[data-testid="PercentageValue"]',
        FieldKind.PERCENTAGE, "today_details", FieldGroup.CURRENT, "humidity_percent",
    ),
    FieldSelector(
        "uv_index", '[data-testid="UVIndexValue"]',
        FieldKind.LABEL, "today_details", FieldGroup.CURRENT, "uv_index",
    ),
    FieldSelector(
        "wind", '[data-testid="Wind"]',
        FieldKind.LABEL, "today_details", FieldGroup.CURRENT, "wind_description",
    ),

    # Today details
    FieldSelector(
        "high_low", TEMPERATURE_VALUE, FieldKind.HIGH_LOW, "today_details", FieldGroup.TODAY
    ),

    # Outlook rows; row 0 repeats today
    FieldSelector(
        "outlook_row", ":scope > li", FieldKind.ROWS, "outlook_table", FieldGroup.OUTLOOK
    ),
    FieldSelector(
        "outlook_date", "h3 span", FieldKind.LABEL, "outlook_row",
        FieldGroup.OUTLOOK, "date_label",
    ),
    FieldSelector(
        "outlook_condition", ICON_PHRASE, FieldKind.LABEL, "outlook_row",
        FieldGroup.OUTLOOK, "condition",
    ),
    FieldSelector(
        "outlook_rain", PRECIP, FieldKind.PERCENTAGE, "outlook_row",
        FieldGroup.OUTLOOK, "chance_of_rain_percent",
    ),
    FieldSelector(
        "outlook_temperature", TEMPERATURE_VALUE, FieldKind.HIGH_LOW, "outlook_row",
        FieldGroup.OUTLOOK,
    ),
])
