"""Legislator-bill sponsorship link."""

SPONSORSHIP_DDL = """
CREATE TABLE IF NOT EXISTS sponsorship (
    legislator_id INTEGER NOT NULL,
    bill_id INTEGER NOT NULL,
    role VARCHAR NOT NULL,
    created_at TIMESTAMP NOT NULL,
    PRIMARY KEY (legislator_id, bill_id, role)
)
"""
