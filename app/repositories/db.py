"""DuckDB connection management."""

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.debug("DB tables initialized")


def get_write_connection(path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Get a writable connection (for ETL operations)."""
    conn = duckdb.connect(path or DB_PATH)
    init_tables(conn)
    logger.debug("DB connected: {}", path or DB_PATH)
    return conn
