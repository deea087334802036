"""Weather pipeline: cache lookup, fetch, normalize for both forecast feeds."""

import asyncio
import logging
from typing import Any

from shoresquad.config.schema import ShoreSquadConfig
from shoresquad.ingest.fetcher import BoundedFetcher
from shoresquad.ingest.normalizer import normalize_current, normalize_multi_day
from shoresquad.models.common import FeedName, cache_key_for
from shoresquad.models.fetch import FailureReason, FetchFailure
from shoresquad.models.weather import CurrentConditions, DailySummary, WeatherReport
from shoresquad.storage.cache import ExpiringCache

logger = logging.getLogger(__name__)

MULTI_DAY_CACHE_KEY = cache_key_for(FeedName.MULTI_DAY)
CURRENT_CACHE_KEY = cache_key_for(FeedName.CURRENT)


class WeatherPipeline:
    def __init__(
        self,
        config: ShoreSquadConfig,
        cache: ExpiringCache,
        fetcher: BoundedFetcher,
    ):
        self.config = config
        self.cache = cache
        self.fetcher = fetcher
        # Most recent failure per feed, for reporting only.
        self.last_failures: dict[FeedName, FetchFailure] = {}

    async def get_multi_day_forecast(self) -> list[DailySummary] | None:
        """Multi-day summaries, ``[]`` when upstream has no data, None when unavailable."""
        forecast, _ = await self._multi_day()
        return forecast

    async def get_current_conditions(self) -> CurrentConditions | None:
        current, _ = await self._current()
        return current

    async def run(self) -> WeatherReport:
        """Load both feeds concurrently."""
        (forecast, forecast_failure), (current, current_failure) = await asyncio.gather(
            self._multi_day(),
            self._current(),
        )

        report = WeatherReport(forecast=forecast, current=current)
        if forecast_failure is not None:
            report.problems[FeedName.MULTI_DAY.value] = forecast_failure.reason
        elif forecast == []:
            report.problems[FeedName.MULTI_DAY.value] = FailureReason.EMPTY_DATA
        if current_failure is not None:
            report.problems[FeedName.CURRENT.value] = current_failure.reason
        elif current is None:
            report.problems[FeedName.CURRENT.value] = FailureReason.EMPTY_DATA

        logger.info(
            "Weather report: %s days, current=%s, problems=%s",
            "n/a" if forecast is None else len(forecast),
            current.condition if current else None,
            dict(report.problems) or "none",
        )
        return report

    def invalidate(self, feed: FeedName | None = None) -> None:
        """Drop cached payloads for one feed, or both."""
        feeds = [feed] if feed is not None else list(FeedName)
        for f in feeds:
            self.cache.clear(cache_key_for(f))
            logger.info("Invalidated cached %s forecast", f.value)

    async def _multi_day(self) -> tuple[list[DailySummary] | None, FetchFailure | None]:
        raw, failure = await self._load_feed(FeedName.MULTI_DAY)
        if failure is not None:
            return None, failure
        return normalize_multi_day(raw), None

    async def _current(self) -> tuple[CurrentConditions | None, FetchFailure | None]:
        raw, failure = await self._load_feed(FeedName.CURRENT)
        if failure is not None:
            return None, failure
        return normalize_current(raw), None

    def _url_for(self, feed: FeedName) -> str:
        if feed == FeedName.MULTI_DAY:
            return self.config.api.multi_day_url
        return self.config.api.current_url

    async def _load_feed(self, feed: FeedName) -> tuple[Any, FetchFailure | None]:
        """Return ``(payload, failure)`` for a feed, from cache or upstream.

        Exactly one of the two is meaningful: a failure means the payload is
        unusable. A JSON ``null`` body is returned but never cached.
        """
        key = cache_key_for(feed)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Using cached %s forecast", feed.value)
            return cached, None

        result = await self.fetcher.fetch(
            self._url_for(feed), timeout_ms=self.config.api.timeout_ms
        )
        if isinstance(result, FetchFailure):
            logger.warning(
                "%s forecast unavailable: %s %s",
                feed.value, result.reason.value, result.detail,
            )
            self.last_failures[feed] = result
            return None, result

        self.last_failures.pop(feed, None)
        if result.payload is None:
            logger.warning("%s forecast returned an empty body", feed.value)
            return None, None

        self.cache.set(key, result.payload, self.config.cache.ttl_seconds)
        return result.payload, None
