"""Data validation functions."""

import duckdb


def validate(conn: duckdb.DuckDBPyConnection) -> dict:
    """Check data integrity across the synced tables."""
    issues = []
    stats = {}

    for table in ("legislator", "bill", "motion", "vote", "sponsorship", "party_loyalty", "api_cache"):
        stats[table] = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    if stats["legislator"] == 0:
        issues.append("No legislators loaded; votes cannot be reconciled")

    current = conn.execute("SELECT COUNT(*) FROM parliament_session WHERE is_current").fetchone()[0]
    stats["current_sessions"] = current
    if current == 0:
        issues.append("No current session set")
    elif current > 1:
        issues.append(f"{current} sessions flagged as current")

    orphan_votes = conn.execute(
        """
        SELECT COUNT(*) FROM vote
        LEFT JOIN bill ON bill.id = vote.bill_id
        WHERE vote.bill_id IS NOT NULL AND bill.id IS NULL
        """
    ).fetchone()[0]
    stats["orphan_bill_links"] = orphan_votes
    if orphan_votes:
        issues.append(f"{orphan_votes} votes link to missing bills")

    unknown_legislators = conn.execute(
        """
        SELECT COUNT(*) FROM vote
        LEFT JOIN legislator l ON l.id = vote.legislator_id
        WHERE l.id IS NULL
        """
    ).fetchone()[0]
    if unknown_legislators:
        issues.append(f"{unknown_legislators} votes reference unknown legislators")

    unsponsored = conn.execute(
        """
        SELECT COUNT(*) FROM bill
        LEFT JOIN sponsorship s ON s.bill_id = bill.id
        WHERE s.bill_id IS NULL AND bill.sponsor_politician_url IS NOT NULL
        """
    ).fetchone()[0]
    stats["bills_without_sponsor_link"] = unsponsored

    bill_votes = conn.execute(
        """
        SELECT COUNT(*), COUNT(sponsor_party) FROM vote
        WHERE bill_id IS NOT NULL OR bill_number IS NOT NULL
        """
    ).fetchone()
    if bill_votes[0]:
        stats["sponsor_party_coverage_pct"] = round(bill_votes[1] / bill_votes[0] * 100, 1)
    else:
        stats["sponsor_party_coverage_pct"] = 0

    return {
        "valid": len(issues) == 0,
        "stats": stats,
        "issues": issues,
    }
