"""Default endpoints and limits for the weather feeds."""

from shoresquad.ingest.fetcher import DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT

# National Environment Agency (Singapore) forecasts, fixed-location.
NEA_FOUR_DAY_URL = "https://api.data.gov.sg/v1/environment/4-day-weather-forecast"
NEA_TWO_HOUR_URL = "https://api.data.gov.sg/v1/environment/2-hour-weather-forecast"

DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_DB_PATH = "data/shoresquad.db"

__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_DB_PATH",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_USER_AGENT",
    "NEA_FOUR_DAY_URL",
    "NEA_TWO_HOUR_URL",
]
