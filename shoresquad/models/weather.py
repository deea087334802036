"""Normalized weather data models consumed by renderers."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from shoresquad.models.fetch import FailureReason

UNKNOWN_DATE_LABEL = "Unknown date"
JUST_NOW_LABEL = "just now"


class WeatherIcon(StrEnum):
    STORMY = "stormy"
    RAINY = "rainy"
    CLOUDY = "cloudy"
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    FOGGY = "foggy"
    DEFAULT = "default"


@dataclass(frozen=True)
class Sample:
    """One low/high reading from a raw forecast entry."""

    low: float | None = None
    high: float | None = None


@dataclass(frozen=True)
class ForecastEntry:
    """A raw multi-day forecast entry after validation and coercion."""

    raw_date: str
    condition: str | None
    temperature: Sample
    humidity: Sample
    wind: Sample


@dataclass(frozen=True)
class MetricRange:
    low: float | None = None  # None = unavailable
    high: float | None = None

    @property
    def available(self) -> bool:
        return self.low is not None or self.high is not None


@dataclass(frozen=True)
class DailySummary:
    raw_date: str
    date: date | None  # None = unparsable upstream date
    primary_condition: str
    conditions: tuple[str, ...]
    temperature: MetricRange
    humidity: MetricRange
    wind: MetricRange
    has_rain: bool
    icon: WeatherIcon

    @property
    def label(self) -> str:
        if self.date is None:
            return UNKNOWN_DATE_LABEL
        return f"{self.date:%a}, {self.date.day} {self.date:%b}"


@dataclass(frozen=True)
class CurrentConditions:
    condition: str
    icon: WeatherIcon
    area: str | None = None
    updated_at: datetime | None = None  # None = "just now"
    valid_from: datetime | None = None
    valid_to: datetime | None = None

    @property
    def updated_label(self) -> str:
        if self.updated_at is None:
            return JUST_NOW_LABEL
        return f"{self.updated_at:%H:%M}"


@dataclass
class WeatherReport:
    """Result of one orchestration pass over both feeds."""

    forecast: list[DailySummary] | None = None
    current: CurrentConditions | None = None
    problems: dict[str, FailureReason] = field(default_factory=dict)

    @property
    def forecast_available(self) -> bool:
        return self.forecast is not None

    @property
    def current_overlay(self) -> CurrentConditions | None:
        # Current conditions are only shown on top of a multi-day forecast.
        if self.forecast is None:
            return None
        return self.current
