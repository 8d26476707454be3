"""Extraction engine: today page markup -> TodayForecast + outlook days.

The engine holds no selectors of its own. Every value is read through a
catalog entry: the entry's ``scope`` decides which node it is looked up
under, its ``kind`` decides how the matched node is read and normalized,
and its ``group``/``target`` decide which model attribute receives it.
"""

import dataclasses
import logging
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup, Tag

from skycast.config.schema import ExtractionConfig
from skycast.errors import SelectorMissError
from skycast.extract.normalize import (
    leaf_text,
    node_text,
    normalize_label,
    normalize_percentage,
    normalize_temperature,
)
from skycast.extract.selectors import (
    DEFAULT_CATALOG,
    FieldGroup,
    FieldKind,
    FieldSelector,
    SelectorCatalog,
)
from skycast.models.common import SEGMENT_ORDER, Segment
from skycast.models.forecast import (
    CurrentConditions,
    DaySegmentForecast,
    Diagnostic,
    ForecastResult,
    OutlookDay,
    TodayForecast,
)

logger = logging.getLogger(__name__)

DEFAULT_OUTLOOK_HORIZON = 2
# The first outlook row repeats today
OUTLOOK_SKIP_ROWS = 1

HIGH_LOW_LABEL = "tempHighF/tempLowF"

# kind -> (text reader, normalizer)
READERS: dict[FieldKind, tuple[Callable[[Tag], str], Callable[[str | None], Any]]] = {
    FieldKind.TEMPERATURE: (node_text, normalize_temperature),
    FieldKind.LABEL: (node_text, normalize_label),
    FieldKind.PERCENTAGE: (leaf_text, normalize_percentage),
}


def _camel(attr: str) -> str:
    head, *rest = attr.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _label(prefix: str | None, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


class _ExtractionRun:
    """Lookup state for a single extract() call."""

    def __init__(
        self,
        catalog: SelectorCatalog,
        doc: BeautifulSoup,
        diagnostics: list[Diagnostic] | None,
    ):
        self.catalog = catalog
        self.doc = doc
        self.diagnostics = diagnostics if diagnostics is not None else []
        self._containers: dict[str, Tag | None] = {}

    def record(self, miss: SelectorMissError) -> None:
        logger.warning("Selector not found: %s (%s)", miss.selector, miss.field)
        self.diagnostics.append(Diagnostic(field=miss.field, selector=miss.selector))

    def _select_one(self, scope: Tag | None, name: str, label: str, **params) -> Tag:
        css = self.catalog.get(name).render(**params)
        node = scope.select_one(css) if scope is not None else None
        if node is None:
            raise SelectorMissError(label, css)
        return node

    def find(self, name: str, scope: Tag | None, label: str | None = None, **params) -> Tag | None:
        try:
            return self._select_one(scope, name, label or name, **params)
        except SelectorMissError as miss:
            self.record(miss)
            return None

    def find_all(self, name: str, scope: Tag | None, label: str | None = None) -> list[Tag]:
        css = self.catalog.get(name).css
        nodes = scope.select(css) if scope is not None else []
        if not nodes:
            self.record(SelectorMissError(label or name, css))
        return nodes

    def container(self, name: str) -> Tag | None:
        """Find a container once per run; a miss is recorded once."""
        if name not in self._containers:
            entry = self.catalog.get(name)
            self._containers[name] = self.find(name, self.scope_node(entry.scope))
        return self._containers[name]

    def scope_node(
        self, scope: str | None, rows: dict[str, Tag | None] | None = None
    ) -> Tag | None:
        if scope is None:
            return self.doc
        if rows and scope in rows:
            return rows[scope]
        if self.catalog.get(scope).kind == FieldKind.CONTAINER:
            return self.container(scope)
        # A row scope outside the row being read
        return None

    def read(
        self,
        entry: FieldSelector,
        rows: dict[str, Tag | None] | None = None,
        prefix: str | None = None,
    ) -> dict[str, Any]:
        """Read one catalog entry into ``{model attribute: value}``."""
        scope = self.scope_node(entry.scope, rows)
        if entry.kind == FieldKind.INDICATOR:
            return {entry.target: self.matches(entry, scope)}
        if entry.kind == FieldKind.HIGH_LOW:
            high, low = _first_last_temperatures(
                self.find_all(entry.name, scope, label=_label(prefix, HIGH_LOW_LABEL))
            )
            return {"temp_high_f": high, "temp_low_f": low}
        reader, normalize = READERS[entry.kind]
        node = self.find(entry.name, scope, label=_label(prefix, _camel(entry.target)))
        return {entry.target: None if node is None else normalize(reader(node))}

    def read_group(
        self,
        group: FieldGroup,
        rows: dict[str, Tag | None] | None = None,
        prefix: str | None = None,
    ) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for entry in self.catalog.fields(group):
            values.update(self.read(entry, rows, prefix))
        return values

    def matches(self, entry: FieldSelector, node: Tag | None) -> bool:
        if node is None:
            return False
        return bool(node.css.match(entry.css))


def _first_last_temperatures(nodes: list[Tag]) -> tuple[int | None, int | None]:
    """First node is the high, last node is the low."""
    if not nodes:
        return None, None
    return (
        normalize_temperature(node_text(nodes[0])),
        normalize_temperature(node_text(nodes[-1])),
    )


def resolve_active_segment(
    segments: dict[Segment, DaySegmentForecast],
) -> tuple[dict[Segment, DaySegmentForecast], Segment | None]:
    """Keep only the first active flag in morning..overnight order."""
    active: Segment | None = None
    resolved: dict[Segment, DaySegmentForecast] = {}
    for name in SEGMENT_ORDER:
        seg = segments[name]
        if seg.is_active and active is None:
            active = name
        elif seg.is_active:
            logger.debug("Ignoring extra active flag on %s (active=%s)", name, active)
            seg = dataclasses.replace(seg, is_active=False)
        resolved[name] = seg
    return resolved, active


class ExtractionEngine:
    def __init__(
        self,
        catalog: SelectorCatalog = DEFAULT_CATALOG,
        outlook_horizon: int = DEFAULT_OUTLOOK_HORIZON,
    ):
        self.catalog = catalog
        self.outlook_horizon = outlook_horizon

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "ExtractionEngine":
        return cls(
            catalog=DEFAULT_CATALOG.with_overrides(config.selector_overrides),
            outlook_horizon=config.outlook_horizon,
        )

    def extract(
        self,
        markup: str | BeautifulSoup,
        diagnostics: list[Diagnostic] | None = None,
    ) -> ForecastResult:
        """Build today's forecast and the outlook from page markup.

        Never raises for missing or malformed structure: each lookup that
        matches nothing yields None (or an empty list) and one Diagnostic,
        appended to ``diagnostics`` when given and logged as a warning.
        """
        if isinstance(markup, BeautifulSoup):
            doc = markup
        else:
            doc = BeautifulSoup(markup, "html.parser")
        run = _ExtractionRun(self.catalog, doc, diagnostics)
        today = self._extract_today(run)
        outlook = self._extract_outlook(run)
        if run.diagnostics:
            logger.info("Extraction finished with %d selector misses", len(run.diagnostics))
        return ForecastResult(today=today, outlook=outlook)

    def _extract_today(self, run: _ExtractionRun) -> TodayForecast:
        segments, active = resolve_active_segment(self._extract_segments(run))
        return TodayForecast(
            current=CurrentConditions(**run.read_group(FieldGroup.CURRENT, prefix="current")),
            segments=segments,
            active_segment=active,
            **run.read_group(FieldGroup.TODAY),
        )

    def _extract_segments(self, run: _ExtractionRun) -> dict[Segment, DaySegmentForecast]:
        row_entry = self.catalog.get("segment_row")
        card = run.scope_node(row_entry.scope)
        segments: dict[Segment, DaySegmentForecast] = {}
        for position, name in enumerate(SEGMENT_ORDER, start=1):
            prefix = f"segments.{name}"
            row = run.find(row_entry.name, card, label=prefix, position=position)
            segments[name] = DaySegmentForecast(
                **run.read_group(FieldGroup.SEGMENT, {row_entry.name: row}, prefix)
            )
        return segments

    def _extract_outlook(self, run: _ExtractionRun) -> list[OutlookDay]:
        row_entry = self.catalog.get("outlook_row")
        table = run.scope_node(row_entry.scope)
        rows = run.find_all(row_entry.name, table, label="outlook")
        window = rows[OUTLOOK_SKIP_ROWS:OUTLOOK_SKIP_ROWS + self.outlook_horizon]
        outlook: list[OutlookDay] = []
        for index, row in enumerate(window, start=OUTLOOK_SKIP_ROWS):
            values = run.read_group(FieldGroup.OUTLOOK, {row_entry.name: row}, f"outlook[{index}]")
            outlook.append(OutlookDay(**values))
        return outlook
