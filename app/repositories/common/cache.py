"""API response cache - TTL key/value store in front of external fetches."""

import json
from datetime import timedelta
from typing import Any, Protocol

from loguru import logger

from app.models import utcnow
from app.repositories.base import BaseRepository


class ResponseCache(Protocol):
    """What the pipelines need from a response cache."""

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, payload: Any, ttl: timedelta) -> None: ...


class CacheRepository(BaseRepository):
    """DuckDB-backed response cache. Expired entries read as misses."""

    def get(self, key: str) -> Any | None:
        """Load a cached payload, None on miss or expiry."""
        row = self.fetchone(
            "SELECT payload FROM api_cache WHERE key = ? AND expires_at > ?",
            [key, utcnow()],
        )
        if row:
            logger.debug("Cache hit: {}", key)
            return json.loads(row[0])
        return None

    def put(self, key: str, payload: Any, ttl: timedelta) -> None:
        """Store a payload with an expiry."""
        now = utcnow()
        self.execute(
            """
            INSERT OR REPLACE INTO api_cache (key, payload, fetched_at, expires_at)
            VALUES (?, ?, ?, ?)
            """,
            [key, json.dumps(payload), now, now + ttl],
        )
        logger.debug("Cache saved: {} (ttl={})", key, ttl)

    def clear(self) -> int:
        """Drop every entry (purge switch only)."""
        count = self.scalar("SELECT COUNT(*) FROM api_cache")
        self.execute("DELETE FROM api_cache")
        logger.info("Response cache cleared ({} entries)", count)
        return count

    def count(self) -> int:
        return self.scalar("SELECT COUNT(*) FROM api_cache")
