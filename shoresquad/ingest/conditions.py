"""Condition text rules and tolerant date/timestamp parsing."""

from datetime import UTC, date, datetime

from shoresquad.models.weather import WeatherIcon

DEFAULT_CONDITION = "Fair"
RAIN_TOKENS: tuple[str, ...] = ("rain",)

# Evaluated in order, first match wins.
ICON_RULES: tuple[tuple[tuple[str, ...], WeatherIcon], ...] = (
    (("thundery",), WeatherIcon.STORMY),
    (("rain", "showers"), WeatherIcon.RAINY),
    (("cloudy", "overcast"), WeatherIcon.CLOUDY),
    (("clear", "sunny", "fair"), WeatherIcon.CLEAR),
    (("partly",), WeatherIcon.PARTLY_CLOUDY),
    (("fog",), WeatherIcon.FOGGY),
)


def weather_icon(condition: str | None) -> WeatherIcon:
    """Map free-text condition to an icon using the ordered substring rules."""
    if not condition:
        return WeatherIcon.DEFAULT
    text = condition.lower()
    for tokens, icon in ICON_RULES:
        if any(token in text for token in tokens):
            return icon
    return WeatherIcon.DEFAULT


def is_rainy(condition: str | None) -> bool:
    if not condition:
        return False
    text = condition.lower()
    return any(token in text for token in RAIN_TOKENS)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp, handling various formats.

    Naive timestamps are assumed to be UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_date(value: object) -> date | None:
    """Parse an ISO-like date ("2025-01-01" or a full timestamp)."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    dt = parse_timestamp(text)
    if dt is None:
        return None
    return dt.date()
