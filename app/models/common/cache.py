"""API response cache table - shared by all fetchers."""

API_CACHE_DDL = """
CREATE TABLE IF NOT EXISTS api_cache (
    key VARCHAR PRIMARY KEY,
    payload JSON NOT NULL,
    fetched_at TIMESTAMP NOT NULL,
    expires_at TIMESTAMP NOT NULL
)
"""
