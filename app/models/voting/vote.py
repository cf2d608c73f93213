"""Vote (one legislator's ballot on one division) model."""

# (vote_id, legislator_id) is the natural key; bill_id and updated_at are the
# only columns rewritten on conflict, so neither is indexed.
VOTE_DDL = """
CREATE TABLE IF NOT EXISTS vote (
    vote_id VARCHAR NOT NULL,
    legislator_id INTEGER NOT NULL,
    date DATE NOT NULL,
    bill_id INTEGER,
    bill_number VARCHAR,
    motion_title VARCHAR,
    ballot VARCHAR NOT NULL,
    result VARCHAR NOT NULL,
    party_position VARCHAR,
    sponsor_party VARCHAR,
    parliament_number INTEGER,
    session_number INTEGER,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL,
    PRIMARY KEY (vote_id, legislator_id)
)
"""

VOTE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_vote_legislator ON vote(legislator_id)",
]
