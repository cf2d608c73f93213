"""Motion (division without a bill) model, loaded from the Commons feed."""

MOTION_DDL = """
CREATE TABLE IF NOT EXISTS motion (
    parliament_number INTEGER NOT NULL,
    session_number INTEGER NOT NULL,
    division_number INTEGER NOT NULL,
    subject VARCHAR,
    date DATE,
    result VARCHAR,
    yeas INTEGER,
    nays INTEGER,
    paired INTEGER,
    document_type VARCHAR,
    PRIMARY KEY (parliament_number, session_number, division_number)
)
"""
