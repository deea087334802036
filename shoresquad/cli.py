"""CLI entry point for the ShoreSquad weather feeds."""

import argparse
import asyncio
import logging

from shoresquad.config.loader import get_config_value, load_config
from shoresquad.config.schema import ShoreSquadConfig
from shoresquad.ingest.fetcher import BoundedFetcher
from shoresquad.models.common import FeedName, cache_key_for
from shoresquad.models.weather import WeatherReport
from shoresquad.pipeline.weather_pipeline import WeatherPipeline
from shoresquad.reporting.formatters import format_report_json, format_report_text
from shoresquad.storage.cache import SqliteCache
from shoresquad.storage.database import open_database


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="shoresquad",
        description="Beach cleanup weather forecasts",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=None, help="SQLite cache path")

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Show forecast and current conditions")
    weather_p.add_argument("--json", action="store_true", help="Print JSON")

    # cache list / cache clear
    cache_p = sub.add_parser("cache", help="Cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    cache_sub.add_parser("list", help="List cached feeds")
    clear_p = cache_sub.add_parser("clear", help="Drop cached feeds")
    clear_p.add_argument(
        "feed", nargs="?", choices=[f.value for f in FeedName], help="Feed to drop"
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. api.timeout_ms")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    db_path = args.db or config.cache.db_path

    if args.command == "weather":
        return _cmd_weather(config, db_path, args)
    elif args.command == "cache":
        return _cmd_cache(db_path, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


async def fetch_report(config: ShoreSquadConfig, db_path: str) -> WeatherReport:
    conn = open_database(db_path)
    try:
        async with BoundedFetcher(
            user_agent=config.api.user_agent, timeout_ms=config.api.timeout_ms
        ) as fetcher:
            pipeline = WeatherPipeline(config, SqliteCache(conn), fetcher)
            return await pipeline.run()
    finally:
        conn.close()


def _cmd_weather(config: ShoreSquadConfig, db_path: str, args) -> int:
    report = asyncio.run(fetch_report(config, db_path))
    if args.json:
        print(format_report_json(report))
    else:
        print(format_report_text(report))
    return 0 if report.forecast_available else 1


def _cmd_cache(db_path: str, args) -> int:
    conn = open_database(db_path)
    try:
        cache = SqliteCache(conn)
        if args.cache_command == "list":
            keys = cache.keys()
            if not keys:
                print("Cache is empty")
            for key in keys:
                print(key)
            return 0
        elif args.cache_command == "clear":
            if args.feed:
                cache.clear(cache_key_for(FeedName(args.feed)))
                print(f"Cleared {args.feed} forecast")
            else:
                count = cache.clear_all()
                print(f"Cleared {count} cache entries")
            return 0
        else:
            print("Use: cache list | cache clear [feed]")
            return 1
    finally:
        conn.close()


def _cmd_config(config: ShoreSquadConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
