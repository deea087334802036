"""Tests for normalized weather models."""

from datetime import UTC, date, datetime

from shoresquad.models.common import FeedName, cache_key_for
from shoresquad.models.fetch import FailureReason, FetchFailure, FetchSuccess
from shoresquad.models.weather import (
    CurrentConditions,
    DailySummary,
    MetricRange,
    WeatherIcon,
    WeatherReport,
)


class TestMetricRange:
    def test_available(self):
        assert MetricRange(1.0, 2.0).available is True
        assert MetricRange(low=1.0).available is True
        assert MetricRange().available is False


class TestDailySummaryLabel:
    def _summary(self, d: date | None) -> DailySummary:
        return DailySummary(
            raw_date="x",
            date=d,
            primary_condition="Fair",
            conditions=(),
            temperature=MetricRange(),
            humidity=MetricRange(),
            wind=MetricRange(),
            has_rain=False,
            icon=WeatherIcon.CLEAR,
        )

    def test_label(self):
        assert self._summary(date(2025, 1, 22)).label == "Wed, 22 Jan"

    def test_unknown(self):
        assert self._summary(None).label == "Unknown date"


class TestCurrentConditions:
    def test_updated_label(self):
        c = CurrentConditions("Fair", WeatherIcon.CLEAR, updated_at=datetime(2025, 1, 1, 9, 5, tzinfo=UTC))
        assert c.updated_label == "09:05"

    def test_just_now(self):
        assert CurrentConditions("Fair", WeatherIcon.CLEAR).updated_label == "just now"


class TestWeatherReport:
    def test_overlay_requires_forecast(self):
        current = CurrentConditions("Fair", WeatherIcon.CLEAR)
        assert WeatherReport(forecast=None, current=current).current_overlay is None
        assert WeatherReport(forecast=[], current=current).current_overlay is current
        assert WeatherReport(forecast=[]).forecast_available is True


class TestFetchResults:
    def test_ok_flags(self):
        assert FetchSuccess(url="u", payload={}).ok is True
        failure = FetchFailure(url="u", reason=FailureReason.HTTP_STATUS, status_code=500)
        assert failure.ok is False
        assert failure.reason == "http_status"


class TestCacheKeys:
    def test_keys(self):
        assert cache_key_for(FeedName.MULTI_DAY) == "forecast:multiday"
        assert cache_key_for(FeedName.CURRENT) == "forecast:current"
