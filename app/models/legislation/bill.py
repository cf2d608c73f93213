"""Bill model."""

BILL_SEQUENCE_DDL = "CREATE SEQUENCE IF NOT EXISTS bill_id_seq START 1"

BILL_DDL = """
CREATE TABLE IF NOT EXISTS bill (
    id INTEGER PRIMARY KEY,
    bill_number VARCHAR NOT NULL,
    session VARCHAR,
    parliament_number INTEGER,
    session_number INTEGER,
    legisinfo_id BIGINT,
    title VARCHAR,
    introduced_date DATE,
    law BOOLEAN,
    private_member_bill BOOLEAN,
    status_code VARCHAR,
    sponsor_politician_url VARCHAR,
    sponsor_membership_url VARCHAR,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

