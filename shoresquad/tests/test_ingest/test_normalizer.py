"""Tests for multi-day and current-conditions normalization."""

import json
import math
from datetime import UTC, date, datetime, timedelta, timezone

from shoresquad.ingest.normalizer import (
    MAX_FORECAST_DAYS,
    coerce_forecast_entry,
    coerce_number,
    normalize_current,
    normalize_multi_day,
)
from shoresquad.models.weather import WeatherIcon
from shoresquad.reporting.formatters import summary_to_dict


def _entry(day: str, forecast: str | None = "Fair", low=24, high=30, **extra) -> dict:
    entry = {"date": day, "temperature": {"low": low, "high": high}}
    if forecast is not None:
        entry["forecast"] = forecast
    entry.update(extra)
    return entry


def _payload(*entries: dict) -> dict:
    return {"items": [{"forecasts": list(entries)}]}


class TestNormalizeMultiDay:
    def test_reference_scenario(self):
        raw = _payload(
            _entry("2025-01-01", "Light Rain", 24, 30),
            _entry("2025-01-01", "Cloudy", 23, 29),
            _entry("2025-01-02", "Fair", 25, 31),
        )
        result = normalize_multi_day(raw)

        assert len(result) == 2
        first, second = result
        assert first.raw_date == "2025-01-01"
        assert first.date == date(2025, 1, 1)
        assert first.temperature.low == 23.5
        assert first.temperature.high == 29.5
        assert first.has_rain is True
        assert first.primary_condition == "Light Rain"
        assert first.conditions == ("Light Rain", "Cloudy")
        assert second.raw_date == "2025-01-02"
        assert second.temperature.low == 25
        assert second.temperature.high == 31
        assert second.has_rain is False

    def test_empty_items(self):
        assert normalize_multi_day({"items": []}) == []

    def test_missing_or_malformed_items(self):
        assert normalize_multi_day(None) == []
        assert normalize_multi_day({}) == []
        assert normalize_multi_day({"items": "nope"}) == []
        assert normalize_multi_day({"items": [None]}) == []
        assert normalize_multi_day({"items": [{"forecasts": []}]}) == []
        assert normalize_multi_day({"items": [{}]}) == []

    def test_nea_fixture(self, four_day_payload: dict):
        result = normalize_multi_day(four_day_payload)
        assert [s.raw_date for s in result] == [
            "2025-01-02", "2025-01-03", "2025-01-04", "2025-01-05",
        ]
        assert result[0].icon == WeatherIcon.STORMY
        assert result[0].wind.low == 10
        assert result[0].wind.high == 20
        assert result[0].humidity.high == 95
        assert result[2].has_rain is True
        assert result[3].icon == WeatherIcon.CLEAR

    def test_fewer_than_four_dates_kept_in_first_seen_order(self):
        raw = _payload(
            _entry("2025-01-03"),
            _entry("2025-01-01"),
            _entry("2025-01-03"),
            _entry("2025-01-02"),
        )
        result = normalize_multi_day(raw)
        assert [s.raw_date for s in result] == ["2025-01-03", "2025-01-01", "2025-01-02"]

    def test_more_than_four_dates_truncated(self):
        days = ["2025-01-06", "2025-01-02", "2025-01-05", "2025-01-01", "2025-01-03", "2025-01-04"]
        raw = _payload(*[_entry(d) for d in days], _entry("2025-01-06", "Cloudy", 20, 40))
        result = normalize_multi_day(raw)

        assert len(result) == MAX_FORECAST_DAYS
        assert [s.raw_date for s in result] == days[:4]
        # Late entries for a retained date still count.
        assert result[0].conditions == ("Fair", "Cloudy")
        assert result[0].temperature.low == 22

    def test_entries_without_date_dropped(self):
        raw = _payload(
            {"forecast": "Light Rain", "temperature": {"low": 1, "high": 2}},
            _entry(""),
            {"date": None, "forecast": "Rain"},
            "not an entry",
            _entry("2025-01-01", "Fair"),
        )
        result = normalize_multi_day(raw)
        assert len(result) == 1
        assert result[0].has_rain is False

    def test_all_temperature_samples_missing(self):
        raw = _payload(
            {"date": "2025-01-01", "forecast": "Fair"},
            {"date": "2025-01-01", "temperature": {"low": "warm", "high": None}},
            {"date": "2025-01-01", "temperature": "hot"},
        )
        summary = normalize_multi_day(raw)[0]
        assert summary.temperature.low is None
        assert summary.temperature.high is None
        assert summary.temperature.available is False

    def test_partial_metrics(self):
        raw = _payload(
            {
                "date": "2025-01-01",
                "temperature": {"low": 24},
                "relative_humidity": {"low": "60", "high": 90},
            },
            {"date": "2025-01-01", "temperature": {"low": 26, "high": 32}},
        )
        summary = normalize_multi_day(raw)[0]
        assert summary.temperature.low == 25
        assert summary.temperature.high == 32
        assert summary.humidity.low == 60
        assert summary.humidity.high == 90
        assert summary.wind.available is False

    def test_never_nan(self):
        raw = _payload(
            {"date": "2025-01-01", "temperature": {"low": float("nan"), "high": "inf"}},
        )
        summary = normalize_multi_day(raw)[0]
        for value in (summary.temperature.low, summary.temperature.high):
            assert value is None or not math.isnan(value)

    def test_overflowing_average_is_unavailable(self):
        raw = _payload(
            _entry("2025-01-01", low="1e308", high=30),
            _entry("2025-01-01", low="1e308", high=32),
        )
        summary = normalize_multi_day(raw)[0]
        assert summary.temperature.low is None
        assert summary.temperature.high == 31
        json.dumps(summary_to_dict(summary), allow_nan=False)

    def test_flat_wind_shape(self):
        raw = _payload({"date": "2025-01-01", "wind": {"low": 5, "high": 15}})
        summary = normalize_multi_day(raw)[0]
        assert summary.wind.low == 5
        assert summary.wind.high == 15

    def test_default_condition(self):
        raw = _payload(_entry("2025-01-01", None), _entry("2025-01-01", "   "))
        summary = normalize_multi_day(raw)[0]
        assert summary.primary_condition == "Fair"
        assert summary.conditions == ()
        assert summary.has_rain is False

    def test_showers_alone_is_not_rain(self):
        raw = _payload(_entry("2025-01-01", "Showers"), _entry("2025-01-01", "Cloudy"))
        summary = normalize_multi_day(raw)[0]
        assert summary.has_rain is False
        assert summary.icon == WeatherIcon.RAINY

    def test_rain_detected_in_later_condition(self):
        raw = _payload(_entry("2025-01-01", "Cloudy"), _entry("2025-01-01", "Passing RAIN"))
        summary = normalize_multi_day(raw)[0]
        assert summary.primary_condition == "Cloudy"
        assert summary.has_rain is True

    def test_unparsable_date_kept_with_unknown_marker(self):
        raw = _payload(_entry("sometime soon"))
        summary = normalize_multi_day(raw)[0]
        assert summary.raw_date == "sometime soon"
        assert summary.date is None
        assert summary.label == "Unknown date"

    def test_singular_forecast_key(self):
        raw = {"items": [{"forecast": [_entry("2025-01-01")]}]}
        assert len(normalize_multi_day(raw)) == 1

    def test_nested_condition_text(self):
        raw = _payload(
            {"date": "2025-01-01", "forecast": {"summary": "Thundery Showers", "code": "TL"}}
        )
        summary = normalize_multi_day(raw)[0]
        assert summary.primary_condition == "Thundery Showers"


class TestNormalizeCurrent:
    def test_nea_fixture(self, two_hour_payload: dict):
        current = normalize_current(two_hour_payload)
        assert current is not None
        assert current.condition == "Light Showers"
        assert current.area == "Pasir Ris"
        assert current.icon == WeatherIcon.RAINY
        sgt = timezone(timedelta(hours=8))
        assert current.updated_at == datetime(2025, 1, 1, 14, 8, 52, tzinfo=sgt)
        assert current.valid_from == datetime(2025, 1, 1, 14, 0, tzinfo=sgt)
        assert current.valid_to == datetime(2025, 1, 1, 16, 0, tzinfo=sgt)

    def test_no_data(self):
        assert normalize_current(None) is None
        assert normalize_current({"items": []}) is None
        assert normalize_current({"items": [{"forecasts": []}]}) is None
        assert normalize_current({"items": [{}]}) is None

    def test_defaults(self):
        current = normalize_current({"items": [{"forecasts": [{}]}]})
        assert current is not None
        assert current.condition == "Fair"
        assert current.area is None
        assert current.updated_at is None
        assert current.updated_label == "just now"

    def test_only_first_entry_used(self):
        raw = {
            "items": [
                {"forecasts": [{"forecast": "Cloudy"}, {"forecast": "Heavy Rain"}]},
                {"forecasts": [{"forecast": "Fog"}]},
            ]
        }
        assert normalize_current(raw).condition == "Cloudy"

    def test_unparsable_timestamp(self):
        raw = {"items": [{"update_timestamp": "yesterday", "forecasts": [{"forecast": "Fair"}]}]}
        assert normalize_current(raw).updated_at is None

    def test_naive_timestamp_assumed_utc(self):
        raw = {"items": [{"update_timestamp": "2025-01-01T06:00:00", "forecasts": [{}]}]}
        assert normalize_current(raw).updated_at == datetime(2025, 1, 1, 6, 0, tzinfo=UTC)


class TestCoercion:
    def test_coerce_number(self):
        assert coerce_number(3) == 3.0
        assert coerce_number(2.5) == 2.5
        assert coerce_number(" 27 ") == 27.0
        assert coerce_number(True) is None
        assert coerce_number(None) is None
        assert coerce_number("n/a") is None
        assert coerce_number(float("inf")) is None
        assert coerce_number([1]) is None

    def test_coerce_entry(self):
        entry = coerce_forecast_entry(
            {"date": "2025-01-01", "forecast": " Cloudy ", "temperature": {"low": "24"}}
        )
        assert entry is not None
        assert entry.condition == "Cloudy"
        assert entry.temperature.low == 24.0
        assert entry.temperature.high is None
        assert entry.humidity.low is None

    def test_coerce_entry_rejects_non_mapping(self):
        assert coerce_forecast_entry(["2025-01-01"]) is None
