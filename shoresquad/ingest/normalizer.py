"""Forecast normalizer: reshapes raw NEA payloads into display-ready models.

Upstream payloads are treated as untrusted loose JSON. Each entry is first
coerced into a ``ForecastEntry`` so that aggregation only ever sees typed
values; anything unusable is dropped or recorded as missing rather than
raised.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from shoresquad.ingest.conditions import (
    DEFAULT_CONDITION,
    is_rainy,
    parse_date,
    parse_timestamp,
    weather_icon,
)
from shoresquad.models.weather import (
    CurrentConditions,
    DailySummary,
    ForecastEntry,
    MetricRange,
    Sample,
)

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 4


def normalize_multi_day(raw: Any) -> list[DailySummary]:
    """Group multi-day forecast entries by date and aggregate each day.

    Dates keep the order they first appear in upstream (no chronological
    sort). Returns an empty list when the payload carries no usable items.
    """
    raw_entries = _first_item_forecasts(raw)
    if not raw_entries:
        return []

    buckets: dict[str, list[ForecastEntry]] = {}
    for raw_entry in raw_entries:
        entry = coerce_forecast_entry(raw_entry)
        if entry is None:
            continue
        if entry.raw_date not in buckets:
            if len(buckets) >= MAX_FORECAST_DAYS:
                continue
            buckets[entry.raw_date] = []
        buckets[entry.raw_date].append(entry)

    summaries = [_summarize_bucket(d, entries) for d, entries in buckets.items()]
    logger.debug(
        "Normalized %d forecast entries into %d days", len(raw_entries), len(summaries)
    )
    return summaries


def normalize_current(raw: Any) -> CurrentConditions | None:
    """Build a current-conditions snapshot from the near-term feed."""
    items = _items(raw)
    if not items:
        return None
    item = items[0]
    forecasts = _forecast_list(item)
    if not forecasts:
        return None

    first = forecasts[0] if isinstance(forecasts[0], Mapping) else {}
    condition = _condition_text(first.get("forecast")) or DEFAULT_CONDITION
    area = first.get("area")

    valid_period = item.get("valid_period")
    if not isinstance(valid_period, Mapping):
        valid_period = {}

    return CurrentConditions(
        condition=condition,
        icon=weather_icon(condition),
        area=area.strip() if isinstance(area, str) and area.strip() else None,
        updated_at=parse_timestamp(item.get("update_timestamp")),
        valid_from=parse_timestamp(valid_period.get("start")),
        valid_to=parse_timestamp(valid_period.get("end")),
    )


def coerce_forecast_entry(raw_entry: Any) -> ForecastEntry | None:
    """Validate one raw forecast entry. Entries without a date are dropped."""
    if not isinstance(raw_entry, Mapping):
        return None
    raw_date = raw_entry.get("date")
    if not isinstance(raw_date, str) or not raw_date.strip():
        return None

    wind = raw_entry.get("wind")
    if isinstance(wind, Mapping) and isinstance(wind.get("speed"), Mapping):
        wind = wind["speed"]

    return ForecastEntry(
        raw_date=raw_date,
        condition=_condition_text(raw_entry.get("forecast")),
        temperature=_coerce_sample(raw_entry.get("temperature")),
        humidity=_coerce_sample(raw_entry.get("relative_humidity")),
        wind=_coerce_sample(wind),
    )


def coerce_number(value: Any) -> float | None:
    """Return a finite float for numeric-like input, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _summarize_bucket(raw_date: str, entries: list[ForecastEntry]) -> DailySummary:
    conditions: list[str] = []
    for entry in entries:
        if entry.condition is not None and entry.condition not in conditions:
            conditions.append(entry.condition)

    primary = conditions[0] if conditions else DEFAULT_CONDITION
    return DailySummary(
        raw_date=raw_date,
        date=parse_date(raw_date),
        primary_condition=primary,
        conditions=tuple(conditions),
        temperature=_average_range([e.temperature for e in entries]),
        humidity=_average_range([e.humidity for e in entries]),
        wind=_average_range([e.wind for e in entries]),
        has_rain=any(is_rainy(c) for c in conditions),
        icon=weather_icon(primary),
    )


def _average_range(samples: list[Sample]) -> MetricRange:
    return MetricRange(
        low=_mean([s.low for s in samples if s.low is not None]),
        high=_mean([s.high for s in samples if s.high is not None]),
    )


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    result = sum(values) / len(values)
    # Huge finite samples can still overflow the sum.
    if not math.isfinite(result):
        return None
    return result


def _coerce_sample(value: Any) -> Sample:
    if not isinstance(value, Mapping):
        return Sample()
    return Sample(low=coerce_number(value.get("low")), high=coerce_number(value.get("high")))


def _condition_text(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("text") or value.get("summary")
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def _items(raw: Any) -> list[Any]:
    if not isinstance(raw, Mapping):
        return []
    items = raw.get("items")
    if not isinstance(items, list) or not items:
        return []
    if not isinstance(items[0], Mapping):
        return []
    return items


def _forecast_list(item: Mapping) -> list[Any]:
    forecasts = item.get("forecasts")
    if not isinstance(forecasts, list):
        # Older payloads name the list in the singular.
        forecasts = item.get("forecast")
    if not isinstance(forecasts, list):
        return []
    return forecasts


def _first_item_forecasts(raw: Any) -> list[Any]:
    items = _items(raw)
    if not items:
        return []
    return _forecast_list(items[0])
