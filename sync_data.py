#!/usr/bin/env python3
"""
Sync House of Commons votes, bills and motions, then recompute party loyalty.

Usage:
    python sync_data.py                              # Nightly run (all stages)
    python sync_data.py bills                        # One stage: bills | motions | votes-bills |
                                                     #   votes-motions | votes-ballots | loyalty
    python sync_data.py votes-bills --only C-5       # One stage, one bill
    python sync_data.py votes-ballots --only "Ziad Aboultaif"
    python sync_data.py --purge                      # Purge votes and caches first
    python sync_data.py session 45 1 2025-05-26      # Set the current session (watermark)
    python sync_data.py --validate                   # Check data integrity
"""

import datetime as dt
import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

import duckdb

from app.repositories import SessionRepository, get_write_connection
from etl import STAGES, RunReport, sync_all
from etl.validation import validate
from parliament_client import ApiUnavailableError, MissingSessionError
from settings import BATCH_SIZE, DB_PATH, MAX_CONCURRENT
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


def run_validation() -> bool:
    """Print the validation report."""
    conn = duckdb.connect(DB_PATH, read_only=True)
    result = validate(conn)
    conn.close()

    print("\n" + "=" * 60)
    print("DATA VALIDATION REPORT")
    print("=" * 60)
    for key, value in result["stats"].items():
        print(f"  {key}: {value:,}" if isinstance(value, int) else f"  {key}: {value}")
    for issue in result["issues"]:
        print(f"  ⚠️  {issue}")
    print("=" * 60)
    print("✅ All data valid!" if result["valid"] else "❌ Some issues found.")
    print("=" * 60 + "\n")
    return result["valid"]


def set_session(args: list[str]) -> None:
    """session <parliament> <session> <start-date> [end-date]"""
    if len(args) < 3 or not args[0].isdigit() or not args[1].isdigit():
        print(__doc__)
        sys.exit(1)
    start = dt.date.fromisoformat(args[2])
    end = dt.date.fromisoformat(args[3]) if len(args) > 3 else None
    conn = get_write_connection()
    try:
        SessionRepository(conn).set_current(int(args[0]), int(args[1]), start, end)
    finally:
        conn.close()


def print_summary(report: RunReport) -> None:
    print("\n" + "=" * 72)
    print(f"{'stage':<15}{'inserted':>10}{'updated':>10}{'skipped':>10}{'unresolved':>12}{'dropped':>9}{'errors':>8}")
    print("-" * 72)
    for s in report.stages:
        print(f"{s.stage:<15}{s.inserted:>10}{s.updated:>10}{s.skipped:>10}{s.unresolved:>12}{s.dropped:>9}{s.errors:>8}")
    if report.fatal:
        print(f"\n❌ Aborted: {report.fatal}")
    print("=" * 72 + "\n")


def _option(args: list[str], name: str) -> str | None:
    if name not in args:
        return None
    i = args.index(name)
    if i + 1 >= len(args):
        print(__doc__)
        sys.exit(1)
    value = args[i + 1]
    del args[i : i + 2]
    return value


def main():
    args = sys.argv[1:]

    if "--validate" in args or args == ["validate"]:
        sys.exit(0 if run_validation() else 1)

    if args and args[0] == "session":
        set_session(args[1:])
        return

    purge = "--purge" in args
    args = [a for a in args if a != "--purge"]
    only = _option(args, "--only")

    stages = tuple(args) if args else STAGES
    unknown = [s for s in stages if s not in STAGES]
    if unknown or (only and len(stages) != 1):
        print(__doc__)
        sys.exit(1)

    logger.info("Stages: {}{}", ", ".join(stages), " [PURGE]" if purge else "")
    logger.info("Throttling: {} concurrent, {}/batch", MAX_CONCURRENT, BATCH_SIZE)

    report = RunReport()
    try:
        sync_all(stages=stages, only=only, purge=purge, report=report)
    except (ApiUnavailableError, MissingSessionError) as e:
        report.fatal = e.message
        logger.error("Sync aborted: {}", e.message)
    finally:
        print_summary(report)

    if not report.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
