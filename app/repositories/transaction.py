"""Batch transaction with per-record rollback markers.

A batch of records is written inside one transaction. Each record runs in
its own scope; when a record fails, only its writes are undone and the
batch carries on. Rolling back to the marker is done without driver
savepoints: the transaction is rolled back, reopened, and the writes of
every record that already succeeded are replayed. Failures are expected to
be rare, so the replay cost only matters on the error path.

Writes made through a scope must be deterministic on replay: generate ids
and timestamps in Python (or read them through ``fetchone``) and pass them
as parameters.
"""

from collections.abc import Callable
from typing import Any, TypeVar

import duckdb
from loguru import logger

T = TypeVar("T")

# Errors that mark a single record as bad rather than the whole batch
RECORD_ERRORS = (duckdb.Error, ValueError, TypeError, KeyError)


def _run(conn: duckdb.DuckDBPyConnection, query: str, params: list | None) -> Any:
    if params:
        return conn.execute(query, params)
    return conn.execute(query)


class RecordScope:
    """Writes of one record inside a BatchTransaction."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self._conn = conn
        self.statements: list[tuple[str, list | None]] = []

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute a write and remember it for replay."""
        result = _run(self._conn, query, params)
        self.statements.append((query, params))
        return result

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Read inside the scope; reads are not replayed."""
        return _run(self._conn, query, params).fetchone()


class BatchTransaction:
    """One transaction around a batch, with isolated per-record failures.

    Usage::

        with BatchTransaction(conn, "votes") as tx:
            for vote in votes:
                tx.run(vote.vote_id, lambda scope, v=vote: repo.upsert(scope, v))
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection, name: str = "batch"):
        self._conn = conn
        self._name = name
        self._applied: list[list[tuple[str, list | None]]] = []
        self.succeeded = 0
        self.failed = 0

    def __enter__(self) -> "BatchTransaction":
        self._conn.execute("BEGIN TRANSACTION")
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._conn.execute("ROLLBACK")
            logger.error("{}: batch rolled back: {}", self._name, exc)
            return False
        self._conn.execute("COMMIT")
        logger.debug("{}: committed {} records ({} failed)", self._name, self.succeeded, self.failed)
        return False

    def run(self, label: str, fn: Callable[[RecordScope], T]) -> T | None:
        """Run one record's writes; on failure roll back just that record and return None."""
        scope = RecordScope(self._conn)
        try:
            result = fn(scope)
        except RECORD_ERRORS as e:
            self.failed += 1
            logger.error("{}: record {} rolled back: {}", self._name, label, e)
            self._rollback_to_marker()
            return None
        self._applied.append(scope.statements)
        self.succeeded += 1
        return result

    def _rollback_to_marker(self) -> None:
        self._conn.execute("ROLLBACK")
        self._conn.execute("BEGIN TRANSACTION")
        for statements in self._applied:
            for query, params in statements:
                _run(self._conn, query, params)
