"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest

from shoresquad.config.schema import ApiConfig, CacheConfig, ShoreSquadConfig
from shoresquad.storage.database import open_database

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEST_MULTI_DAY_URL = "https://test-nea.example.com/4-day"
TEST_CURRENT_URL = "https://test-nea.example.com/2-hour"


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Temporary SQLite database with migrations applied."""
    conn = open_database(tmp_path / "test.db")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path: Path) -> ShoreSquadConfig:
    return ShoreSquadConfig(
        api=ApiConfig(
            multi_day_url=TEST_MULTI_DAY_URL,
            current_url=TEST_CURRENT_URL,
            timeout_ms=200,
        ),
        cache=CacheConfig(ttl_seconds=3600, db_path=str(tmp_path / "cache.db")),
    )


@pytest.fixture
def four_day_payload() -> dict:
    return load_fixture("nea_four_day.json")


@pytest.fixture
def two_hour_payload() -> dict:
    return load_fixture("nea_two_hour.json")
