"""Output formatters for weather reports."""

import json
from typing import Any

from shoresquad.models.weather import (
    CurrentConditions,
    DailySummary,
    MetricRange,
    WeatherIcon,
    WeatherReport,
)

ICON_EMOJI: dict[WeatherIcon, str] = {
    WeatherIcon.STORMY: "⛈️",
    WeatherIcon.RAINY: "🌧️",
    WeatherIcon.CLOUDY: "☁️",
    WeatherIcon.CLEAR: "☀️",
    WeatherIcon.PARTLY_CLOUDY: "⛅",
    WeatherIcon.FOGGY: "🌫️",
    WeatherIcon.DEFAULT: "🌤️",
}

RAIN_ADVICE = "Bring rain gear"
DRY_ADVICE = "Good cleanup weather"
UNAVAILABLE_MESSAGE = "Weather data currently unavailable. Check back soon!"
NO_DATA_MESSAGE = "No forecast data published yet."


def format_range(r: MetricRange, unit: str) -> str:
    if not r.available:
        return "n/a"
    low = "?" if r.low is None else f"{r.low:g}"
    high = "?" if r.high is None else f"{r.high:g}"
    return f"{low}-{high}{unit}"


def format_report_text(report: WeatherReport) -> str:
    """Plain text weather cards, current conditions first."""
    if report.forecast is None:
        return UNAVAILABLE_MESSAGE

    lines: list[str] = []
    current = report.current_overlay
    if current is not None:
        lines.append("=== Current Conditions (Next 2 Hours) ===")
        where = f" ({current.area})" if current.area else ""
        lines.append(f"{ICON_EMOJI[current.icon]} {current.condition}{where}")
        lines.append(f"Last updated: {current.updated_label}")
        lines.append("")

    if not report.forecast:
        lines.append(NO_DATA_MESSAGE)
        return "\n".join(lines)

    for s in report.forecast:
        lines.append(f"=== {s.label} ===")
        lines.append(f"{ICON_EMOJI[s.icon]} {s.primary_condition}")
        if s.conditions:
            lines.append(f"Conditions: {', '.join(s.conditions)}")
        lines.append(
            f"Temp: {format_range(s.temperature, '°C')} | "
            f"Humidity: {format_range(s.humidity, '%')} | "
            f"Wind: {format_range(s.wind, ' km/h')}"
        )
        lines.append(RAIN_ADVICE if s.has_rain else DRY_ADVICE)
        lines.append("")
    return "\n".join(lines).rstrip()


def range_to_dict(r: MetricRange) -> dict[str, float | None]:
    return {"low": r.low, "high": r.high}


def summary_to_dict(s: DailySummary) -> dict[str, Any]:
    return {
        "date": s.date.isoformat() if s.date else None,
        "raw_date": s.raw_date,
        "label": s.label,
        "primary_condition": s.primary_condition,
        "conditions": list(s.conditions),
        "temperature": range_to_dict(s.temperature),
        "humidity": range_to_dict(s.humidity),
        "wind": range_to_dict(s.wind),
        "has_rain": s.has_rain,
        "icon": s.icon.value,
    }


def current_to_dict(c: CurrentConditions) -> dict[str, Any]:
    return {
        "condition": c.condition,
        "icon": c.icon.value,
        "area": c.area,
        "updated_at": c.updated_at.isoformat() if c.updated_at else None,
        "updated_label": c.updated_label,
        "valid_from": c.valid_from.isoformat() if c.valid_from else None,
        "valid_to": c.valid_to.isoformat() if c.valid_to else None,
    }


def report_to_dict(report: WeatherReport) -> dict[str, Any]:
    current = report.current_overlay
    return {
        "forecast": (
            None if report.forecast is None
            else [summary_to_dict(s) for s in report.forecast]
        ),
        "current": current_to_dict(current) if current else None,
        "problems": {k: v.value for k, v in report.problems.items()},
    }


def format_report_json(report: WeatherReport) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)
