"""Tests for the selector catalog."""

import dataclasses

import pytest
from bs4 import BeautifulSoup

from skycast.extract.selectors import DEFAULT_CATALOG, FieldGroup, FieldKind
from skycast.models.forecast import CurrentConditions, DaySegmentForecast, OutlookDay

GROUP_MODELS = {
    FieldGroup.SEGMENT: DaySegmentForecast,
    FieldGroup.CURRENT: CurrentConditions,
    FieldGroup.OUTLOOK: OutlookDay,
}


class TestSelectorCatalog:
    def test_scopes_reference_catalog_entries(self):
        for entry in DEFAULT_CATALOG.entries():
            if entry.scope is not None:
                assert entry.scope in DEFAULT_CATALOG

    def test_scope_entries_are_structural(self):
        for entry in DEFAULT_CATALOG.entries():
            if entry.scope is not None:
                scope = DEFAULT_CATALOG.get(entry.scope)
                assert scope.kind in (FieldKind.CONTAINER, FieldKind.ROW, FieldKind.ROWS)

    def test_targets_are_model_fields(self):
        for group, model in GROUP_MODELS.items():
            names = {f.name for f in dataclasses.fields(model)}
            for entry in DEFAULT_CATALOG.fields(group):
                if entry.kind == FieldKind.HIGH_LOW:
                    assert {"temp_high_f", "temp_low_f"} <= names
                else:
                    assert entry.target in names, entry.name

    def test_fields_skip_structural_entries(self):
        names = [e.name for e in DEFAULT_CATALOG.fields(FieldGroup.SEGMENT)]
        assert "segment_row" not in names
        assert names[0] == "segment_temperature"

    def test_every_value_entry_has_a_group(self):
        for entry in DEFAULT_CATALOG.entries():
            if not entry.is_structural:
                assert entry.group is not None, entry.name

    def test_segment_row_renders_position(self):
        row = DEFAULT_CATALOG.get("segment_row")
        assert row.render(position=3) == "ul > li:nth-child(3)"

    def test_with_overrides_replaces_css(self):
        catalog = DEFAULT_CATALOG.with_overrides({"today_card": "#today"})
        assert catalog.get("today_card").css == "#today"
        assert catalog.get("today_card").kind == FieldKind.CONTAINER
        assert DEFAULT_CATALOG.get("today_card").css != "#today"
        assert len(catalog) == len(DEFAULT_CATALOG)

    def test_with_overrides_unknown_field(self):
        with pytest.raises(KeyError):
            DEFAULT_CATALOG.with_overrides({"nope": "#x"})

    def test_row_override_requires_position(self):
        with pytest.raises(ValueError, match="position"):
            DEFAULT_CATALOG.with_overrides({"segment_row": "ul > li"})

    def test_row_override_with_position(self):
        catalog = DEFAULT_CATALOG.with_overrides({"segment_row": "ol > li:nth-of-type({position})"})
        assert catalog.get("segment_row").render(position=2) == "ol > li:nth-of-type(2)"

    def test_replace_entries_changes_scope(self):
        catalog = DEFAULT_CATALOG.replace_entries(feels_like={"scope": "current_card"})
        assert catalog.get("feels_like").scope == "current_card"
        assert DEFAULT_CATALOG.get("feels_like").scope == "today_details"

    def test_selectors_are_valid_css(self, today_markup: str):
        soup = BeautifulSoup(today_markup, "html.parser")
        for entry in DEFAULT_CATALOG.entries():
            css = entry.render(position=1) if "{position}" in entry.css else entry.css
            soup.select(css)

    def test_containers_found_in_fixture(self, today_markup: str):
        soup = BeautifulSoup(today_markup, "html.parser")
        for name in ("today_card", "current_card", "today_details", "outlook_table"):
            assert soup.select_one(DEFAULT_CATALOG.get(name).css) is not None
