"""Shared object cache with get-or-recompute semantics.

Two backends are provided:

- MemoryObjectCache: per-process, backed by cachetools.TLRUCache
- SqliteObjectCache: shared between processes through a sqlite file

Both guarantee that, for a given key, only one caller at a time runs the
recompute callback. Callers arriving while a recompute is in flight block
until it finishes and then read the stored value.
"""

import json
import logging
import math
import sqlite3
import threading
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TLRUCache

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TTL_MINUTE = 60
TTL_HOUR = 3600
TTL_DAY = 86400

GLOBAL_KEY_PREFIX = "global"

CACHE_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS object_cache (
    cache_key TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    expires_at REAL
);
"""


def make_global_key(*components: str) -> str:
    """Build a cache key shared by every deployment using the cache."""
    return ":".join((GLOBAL_KEY_PREFIX,) + tuple(str(c) for c in components))


def _is_cacheable(value: Any) -> bool:
    return value is not None and value is not False


class ObjectCache(ABC):
    """Key-value store with expiration and single-flight recomputation."""

    def __init__(self):
        self._locks_guard = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = defaultdict(threading.Lock)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            return self._key_locks[key]

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the unexpired value for key, or None."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value under key for ttl seconds (0 means no expiry)."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""

    def get_with_set_callback(
        self,
        key: str,
        ttl: int,
        callback: Callable[[], Any],
    ) -> Any:
        """Return the cached value, recomputing it on a miss.

        Args:
            key: Cache key
            ttl: Expiration in seconds for a freshly computed value
            callback: Produces the value; None or False means "do not cache"

        Returns:
            The cached or freshly computed value
        """
        value = self.get(key)
        if value is not None:
            return value

        with self._lock_for(key):
            # Another caller may have filled the key while we waited
            value = self.get(key)
            if value is not None:
                return value

            logger.debug(f"Cache miss, recomputing {key}")
            value = callback()
            if _is_cacheable(value):
                self.set(key, value, ttl)
            return value


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl: int


def _entry_expiry(_key: str, entry: _Entry, now: float) -> float:
    if entry.ttl <= 0:
        return math.inf
    return now + entry.ttl


class MemoryObjectCache(ObjectCache):
    """In-process cache; entries expire individually."""

    def __init__(self, maxsize: int = 1024, timer: Callable[[], float] = time.monotonic):
        super().__init__()
        self._data: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_entry_expiry, timer=timer)
        self._data_lock = threading.RLock()

    def get(self, key: str) -> Any:
        with self._data_lock:
            entry = self._data.get(key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: Any, ttl: int) -> None:
        with self._data_lock:
            self._data[key] = _Entry(value=value, ttl=ttl)

    def delete(self, key: str) -> None:
        with self._data_lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._data_lock:
            return len(self._data)


class SqliteObjectCache(ObjectCache):
    """Cache stored in a sqlite database so several processes share it.

    Values must be JSON serializable. Recomputation runs inside an
    IMMEDIATE transaction, which holds the database write lock: a second
    process missing the same key waits for that lock (up to ``timeout``)
    and then finds the stored value.
    """

    def __init__(
        self,
        path: str,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__()
        self.path = path
        self.timeout = timeout
        self._clock = clock
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        # Autocommit mode, transactions are opened explicitly
        return sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            conn.executescript(CACHE_SCHEMA_SQL)
        finally:
            conn.close()

    def _read(self, conn: sqlite3.Connection, key: str) -> Any:
        row = conn.execute(
            """
            SELECT value_json FROM object_cache
            WHERE cache_key = ? AND (expires_at IS NULL OR expires_at > ?)
            """,
            (key, self._clock()),
        ).fetchone()
        if not row:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    def _write(self, conn: sqlite3.Connection, key: str, value: Any, ttl: int) -> None:
        expires_at = self._clock() + ttl if ttl > 0 else None
        conn.execute(
            """
            INSERT INTO object_cache(cache_key, value_json, expires_at)
            VALUES (?, ?, ?)
            ON CONFLICT(cache_key)
            DO UPDATE SET
                value_json = excluded.value_json,
                expires_at = excluded.expires_at
            """,
            (key, json.dumps(value, ensure_ascii=False), expires_at),
        )

    def get(self, key: str) -> Any:
        conn = self._connect()
        try:
            return self._read(conn, key)
        finally:
            conn.close()

    def set(self, key: str, value: Any, ttl: int) -> None:
        conn = self._connect()
        try:
            self._write(conn, key, value, ttl)
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM object_cache WHERE cache_key = ?", (key,))
        finally:
            conn.close()

    def purge_expired(self) -> int:
        """Delete expired rows.

        Returns:
            Number of rows removed
        """
        conn = self._connect()
        try:
            cursor = conn.execute(
                "DELETE FROM object_cache WHERE expires_at IS NOT NULL AND expires_at <= ?",
                (self._clock(),),
            )
            return cursor.rowcount
        finally:
            conn.close()

    def get_with_set_callback(
        self,
        key: str,
        ttl: int,
        callback: Callable[[], Any],
    ) -> Any:
        value = self.get(key)
        if value is not None:
            return value

        with self._lock_for(key):
            conn = self._connect()
            try:
                conn.execute("BEGIN IMMEDIATE")
                try:
                    value = self._read(conn, key)
                    if value is None:
                        logger.debug(f"Cache miss, recomputing {key}")
                        value = callback()
                        if _is_cacheable(value):
                            self._write(conn, key, value, ttl)
                    conn.execute("COMMIT")
                except BaseException:
                    conn.execute("ROLLBACK")
                    raise
            finally:
                conn.close()
            return value


def _config_number(config: dict, key: str, default, kind):
    value = config.get(key, default)
    try:
        number = kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"cache.{key} must be a number, got {value!r}") from e
    if number <= 0:
        raise ConfigurationError(f"cache.{key} must be positive, got {value!r}")
    return number


def create_object_cache(config: Optional[dict] = None) -> ObjectCache:
    """Create a cache from the ``cache`` configuration section.

    Args:
        config: Mapping with ``backend`` (memory or sqlite), ``path``,
            ``timeout`` and ``maxsize``; None selects the in-memory backend

    Returns:
        Configured ObjectCache

    Raises:
        ConfigurationError: If ``timeout`` or ``maxsize`` is not a positive number
    """
    config = config or {}
    backend = str(config.get("backend", "memory")).lower()

    if backend == "sqlite":
        path = config.get("path", "wordnames_cache.db")
        timeout = _config_number(config, "timeout", 30.0, float)
        logger.info(f"Using sqlite object cache at {path}")
        return SqliteObjectCache(path, timeout=timeout)

    if backend != "memory":
        logger.warning(f"Unknown cache backend '{backend}', using memory")
    return MemoryObjectCache(maxsize=_config_number(config, "maxsize", 1024, int))
