"""Expiring key/value cache for forecast payloads.

Entries expire lazily: every ``get`` checks the stored expiry and purges the
entry once ``now >= expiry``. There is no background sweep.
"""

import json
import logging
import sqlite3
import time
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ExpiringCache(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    def clear(self, key: str) -> None: ...


class SqliteCache:
    """Cache persisted to the ``cache_entries`` table."""

    def __init__(self, conn: sqlite3.Connection, clock: Clock = time.time):
        self.conn = conn
        self.clock = clock

    def get(self, key: str) -> Any | None:
        row = self.conn.execute(
            "SELECT value_json, expiry FROM cache_entries WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None

        if self.clock() >= row[1]:
            logger.debug("Cache entry %s expired", key)
            self.clear(key)
            return None

        try:
            return json.loads(row[0])
        except ValueError:
            logger.warning("Discarding corrupt cache entry %s", key)
            self.clear(key)
            return None

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        value_json = json.dumps(value)
        expiry = self.clock() + ttl_seconds
        self.conn.execute(
            "INSERT INTO cache_entries (key, value_json, expiry, stored_at) "
            "VALUES (?, ?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json, "
            "expiry = excluded.expiry, stored_at = CURRENT_TIMESTAMP",
            (key, value_json, expiry),
        )
        self.conn.commit()

    def clear(self, key: str) -> None:
        self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        self.conn.commit()

    def clear_all(self) -> int:
        cursor = self.conn.execute("DELETE FROM cache_entries")
        self.conn.commit()
        return cursor.rowcount

    def keys(self) -> list[str]:
        rows = self.conn.execute(
            "SELECT key FROM cache_entries ORDER BY key"
        ).fetchall()
        return [row[0] for row in rows]


class MemoryCache:
    """In-process cache with the same semantics as ``SqliteCache``.

    Values are held JSON-encoded so callers never share mutable state with
    the cache.
    """

    def __init__(self, clock: Clock = time.time):
        self.clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value_json, expiry = entry
        if self.clock() >= expiry:
            del self._entries[key]
            return None
        try:
            return json.loads(value_json)
        except ValueError:
            logger.warning("Discarding corrupt cache entry %s", key)
            del self._entries[key]
            return None

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = (json.dumps(value), self.clock() + ttl_seconds)

    def clear(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def keys(self) -> list[str]:
        return sorted(self._entries)
