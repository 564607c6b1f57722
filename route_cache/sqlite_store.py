"""
Persistent tier: routes stored as JSON rows in a local SQLite file.

Survives process restarts. Availability is probed lazily on first use; once a
connection succeeds it is kept for the lifetime of the process. A failed probe
is retried on the next call.
"""
from __future__ import annotations

import json
import logging
import os
import sqlite3
import threading
import time
from typing import Callable, Optional, Tuple

from routing.models import RouteResult

from .models import CacheEntry
from .stores import CacheStore

logger = logging.getLogger(__name__)

DEFAULT_TTL_S = 60 * 60

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS routes (
          k           TEXT PRIMARY KEY
        , v           TEXT NOT NULL
        , created_at  REAL NOT NULL
        , ttl_s       REAL NOT NULL
    )
"""


class SQLiteCacheStore(CacheStore):
    name = "sqlite"

    def __init__(
        self,
        path: str,
        default_ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.time,
    ):
        if default_ttl_s <= 0:
            raise ValueError("default_ttl_s must be > 0")

        self.path = path
        self.default_ttl_s = default_ttl_s
        self._clock = clock
        self._lock = threading.Lock()
        self._con: Optional[sqlite3.Connection] = None

    def _connect(self) -> sqlite3.Connection:
        if self._con is not None:
            return self._con

        directory = os.path.dirname(os.path.abspath(self.path))
        if self.path != ":memory:":
            os.makedirs(directory, exist_ok=True)

        con = sqlite3.connect(self.path, check_same_thread=False)
        try:
            with con:
                con.execute(_SCHEMA)
        except sqlite3.Error:
            con.close()
            raise

        self._con = con
        logger.debug(f"Route cache DB at: {self.path}")
        return con

    def is_available(self) -> bool:
        with self._lock:
            if self._con is not None:
                return True
            try:
                self._connect()
                return True
            except (sqlite3.Error, OSError) as exc:
                logger.warning(f"SQLite route cache unavailable at {self.path}: {exc}")
                return False

    def get_with_ttl(self, key: str) -> Tuple[Optional[RouteResult], Optional[float]]:
        with self._lock:
            con = self._connect()
            row = con.execute("SELECT v, created_at, ttl_s FROM routes WHERE k = ?", (key,)).fetchone()
            if not row:
                return None, None

            payload, created_at, ttl_s = row
            entry = CacheEntry(key=key, result=RouteResult.from_dict(json.loads(payload)),
                               created_at=created_at, ttl_s=ttl_s)
            now = self._clock()
            if entry.is_expired(now):
                with con:
                    con.execute("DELETE FROM routes WHERE k = ?", (key,))
                return None, None

            return entry.result, entry.remaining_s(now)

    def get(self, key: str) -> Optional[RouteResult]:
        return self.get_with_ttl(key)[0]

    def set(self, key: str, result: RouteResult, ttl_s: Optional[float] = None) -> None:
        ttl_s = ttl_s if ttl_s is not None else self.default_ttl_s
        with self._lock:
            con = self._connect()
            with con:
                con.execute(
                    "INSERT OR REPLACE INTO routes(k, v, created_at, ttl_s) VALUES (?, ?, ?, ?)",
                    (key, json.dumps(result.to_dict()), self._clock(), ttl_s),
                )

    def clear(self) -> None:
        with self._lock:
            con = self._connect()
            with con:
                con.execute("DELETE FROM routes")

    def size(self) -> int:
        with self._lock:
            con = self._connect()
            (count,) = con.execute("SELECT COUNT(*) FROM routes").fetchone()
            return int(count)

    def close(self) -> None:
        with self._lock:
            if self._con is not None:
                self._con.close()
                self._con = None
