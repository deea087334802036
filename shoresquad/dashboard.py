"""Weather JSON API — FastAPI backend for the ShoreSquad page renderer."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from shoresquad.config.schema import ShoreSquadConfig
from shoresquad.ingest.fetcher import BoundedFetcher
from shoresquad.pipeline.weather_pipeline import WeatherPipeline
from shoresquad.reporting.formatters import (
    current_to_dict,
    report_to_dict,
    summary_to_dict,
)
from shoresquad.storage.cache import SqliteCache
from shoresquad.storage.database import open_database

T = TypeVar("T")


def create_app(
    config: ShoreSquadConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the API. ``client`` is shared by all requests when given.

    Handlers are plain functions, so FastAPI runs them in its threadpool and
    the blocking SQLite work stays off the server's event loop. Each request
    drives the pipeline on a short-lived loop of its own.
    """
    config = config or ShoreSquadConfig()

    app = FastAPI(title="ShoreSquad Weather", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    def _with_pipeline(step: Callable[[WeatherPipeline], Awaitable[T]]) -> T:
        async def _run() -> T:
            conn = open_database(config.cache.db_path)
            try:
                async with BoundedFetcher(
                    client=client,
                    user_agent=config.api.user_agent,
                    timeout_ms=config.api.timeout_ms,
                ) as fetcher:
                    return await step(WeatherPipeline(config, SqliteCache(conn), fetcher))
            finally:
                conn.close()

        return asyncio.run(_run())

    @app.get("/api/weather")
    def get_weather():
        """Both feeds; current conditions only alongside a forecast."""
        report = _with_pipeline(lambda p: p.run())
        return report_to_dict(report)

    @app.get("/api/weather/forecast")
    def get_forecast():
        forecast = _with_pipeline(lambda p: p.get_multi_day_forecast())
        if forecast is None:
            raise HTTPException(503, "Multi-day forecast unavailable")
        return [summary_to_dict(s) for s in forecast]

    @app.get("/api/weather/current")
    def get_current():
        current = _with_pipeline(lambda p: p.get_current_conditions())
        if current is None:
            raise HTTPException(503, "Current conditions unavailable")
        return current_to_dict(current)

    @app.post("/api/weather/refresh")
    def refresh():
        """Drop cached payloads so the next read goes upstream."""
        async def _invalidate(pipeline: WeatherPipeline) -> None:
            pipeline.invalidate()

        _with_pipeline(_invalidate)
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8777)
