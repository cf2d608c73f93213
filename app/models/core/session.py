"""Parliamentary session model - holds the sync watermark."""

SESSION_DDL = """
CREATE TABLE IF NOT EXISTS parliament_session (
    parliament_number INTEGER NOT NULL,
    session_number INTEGER NOT NULL,
    start_date DATE NOT NULL,
    end_date DATE,
    is_current BOOLEAN NOT NULL DEFAULT FALSE,
    PRIMARY KEY (parliament_number, session_number)
)
"""
