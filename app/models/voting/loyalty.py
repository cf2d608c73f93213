"""Party loyalty table - one recomputed row per legislator."""

PARTY_LOYALTY_DDL = """
CREATE TABLE IF NOT EXISTS party_loyalty (
    legislator_id INTEGER PRIMARY KEY,
    party VARCHAR,
    with_party_votes INTEGER NOT NULL,
    against_party_votes INTEGER NOT NULL,
    free_votes INTEGER NOT NULL,
    abstained_paired_votes INTEGER NOT NULL,
    excluded_votes INTEGER NOT NULL,
    total_votes INTEGER NOT NULL,
    loyalty_percentage DOUBLE NOT NULL,
    opposition_percentage DOUBLE NOT NULL,
    free_vote_percentage DOUBLE NOT NULL,
    abstained_percentage DOUBLE NOT NULL,
    calculated_at TIMESTAMP NOT NULL,
    expires_at TIMESTAMP NOT NULL
)
"""
