"""Tests for forecast and place models."""

import json

import pytest

from skycast.models.common import SEGMENT_ORDER, Segment
from skycast.models.forecast import (
    CurrentConditions,
    DaySegmentForecast,
    ForecastReport,
    OutlookDay,
    TodayForecast,
)
from skycast.models.place import Place


class TestTodayForecast:
    def test_default_has_all_segments(self):
        today = TodayForecast()
        assert list(today.segments) == list(SEGMENT_ORDER)
        assert today.active_segment is None

    def test_frozen(self):
        today = TodayForecast()
        with pytest.raises(AttributeError):
            today.temp_high_f = 80

    def test_segment_lookup_by_name(self):
        today = TodayForecast(
            segments={
                s: DaySegmentForecast(temperature_f=i) for i, s in enumerate(SEGMENT_ORDER)
            }
        )
        assert today.segment("evening").temperature_f == 2
        assert today.segment(Segment.OVERNIGHT).temperature_f == 3


class TestForecastReport:
    def test_to_dict_is_json_serializable(self):
        report = ForecastReport(
            place=Place(place_id="p1", display_name="Gary, Indiana, United States"),
            fetched_at="2026-10-17T20:00:00+00:00",
            today=TodayForecast(
                temp_high_f=79,
                temp_low_f=60,
                current=CurrentConditions(temperature_f=74, condition="Sunny"),
                active_segment=Segment.MORNING,
            ),
            outlook=[OutlookDay(date_label="Sat 18", temp_high_f=72, temp_low_f=55)],
        )
        data = json.loads(json.dumps(report.to_dict()))
        assert data["location"] == "Gary, Indiana, United States"
        assert data["placeId"] == "p1"
        assert data["today"]["tempHighF"] == 79
        assert data["today"]["activeSegment"] == "morning"
        assert data["today"]["currentSnapshot"]["condition"] == "Sunny"
        assert data["outlook"][0]["tempLowF"] == 55

    def test_place_to_dict(self):
        assert Place("p1", "Gary").to_dict() == {"placeId": "p1", "displayName": "Gary"}
