"""Base repository class."""

from collections.abc import Callable
from typing import Any

import duckdb
from loguru import logger


class BaseRepository:
    """Base repository with common functionality.

    Repositories built for one sync run share a single connection so that
    reads made while a batch transaction is open see its uncommitted rows.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self._db = conn
        self._cache: dict[str, Any] = {}
        logger.debug("{} initialized", self.__class__.__name__)

    def clear_cache(self) -> None:
        """Clear in-memory cache."""
        self._cache.clear()

    def _cached(self, key: str, fn: Callable[[], Any]) -> Any:
        """Get from cache or compute."""
        if key not in self._cache:
            self._cache[key] = fn()
        return self._cache[key]

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()

    def scalar(self, query: str, params: list | None = None) -> Any:
        """Execute and return the first column of the first row, or None."""
        row = self.fetchone(query, params)
        return row[0] if row else None
