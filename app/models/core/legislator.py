"""Legislator (MP) model."""

LEGISLATOR_DDL = """
CREATE TABLE IF NOT EXISTS legislator (
    id INTEGER PRIMARY KEY,
    name VARCHAR NOT NULL,
    first_name VARCHAR,
    last_name VARCHAR,
    party VARCHAR,
    district VARCHAR
)
"""

LEGISLATOR_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_legislator_name ON legislator(name)",
]
