"""Main sync orchestration."""

import asyncio

from loguru import logger

from app.container import Container
from app.repositories import CacheRepository, get_write_connection
from etl.bills import sync_bills
from etl.helpers import RunReport, SyncStats, require_session
from etl.motions import sync_motions
from etl.votes_from_ballots import sync_votes_from_ballots
from etl.votes_from_bills import sync_votes_from_bills
from etl.votes_from_motions import sync_votes_from_motions
from parliament_client import BaseClient, CommonsClient, ParliamentClient

STAGES = ("bills", "motions", "votes-bills", "votes-motions", "votes-ballots", "loyalty")


def purge_data(container: Container) -> None:
    """Drop votes, loyalty records and cached responses before a full re-sync."""
    container.votes.purge()
    container.loyalty_repo.clear()
    CacheRepository(container.conn).clear()


def recompute_loyalty(container: Container, legislator_name: str | None = None) -> SyncStats:
    stats = SyncStats("loyalty")
    if legislator_name:
        legislator = container.legislators.find_by_name(legislator_name)
        if legislator is None:
            logger.warning("Legislator not found: {}", legislator_name)
            stats.unresolved += 1
            return stats
        ids = [legislator.id]
    else:
        ids = container.votes.legislator_ids()
    stats.updated = container.loyalty.calculate_all(ids)
    return stats


async def run_stages(
    container: Container,
    stages: tuple[str, ...] = STAGES,
    only: str | None = None,
    purge: bool = False,
    report: RunReport | None = None,
    client: BaseClient | None = None,
    commons: BaseClient | None = None,
) -> RunReport:
    """Run stages in order against the current session.

    ``only`` narrows a stage to one entity: a bill number, a motion's
    division number, or a legislator name.
    """
    report = report if report is not None else RunReport()
    session = require_session(container.sessions)
    logger.info("Session {} (started {})", session.code, session.start_date)

    if purge:
        purge_data(container)

    async with client or ParliamentClient() as api:
        for stage in stages:
            logger.info("Stage: {}", stage)
            if stage == "bills":
                report.add(await sync_bills(api, container, session, bill_number=only))
            elif stage == "motions":
                async with commons or CommonsClient() as feed:
                    report.add(await sync_motions(feed, container, session))
            elif stage == "votes-bills":
                report.add(await sync_votes_from_bills(api, container, session, bill_number=only))
            elif stage == "votes-motions":
                division = int(only) if only and only.isdigit() else None
                report.add(await sync_votes_from_motions(api, container, session, division_number=division))
            elif stage == "votes-ballots":
                report.add(await sync_votes_from_ballots(api, container, session, legislator_name=only))
            elif stage == "loyalty":
                report.add(recompute_loyalty(container, only))
            else:
                raise ValueError(f"Unknown stage: {stage}")

    logger.info("Sync complete!")
    return report


def sync_all(
    stages: tuple[str, ...] = STAGES,
    only: str | None = None,
    purge: bool = False,
    report: RunReport | None = None,
    db_path: str | None = None,
) -> RunReport:
    """Main sync entry point."""
    conn = get_write_connection(db_path)
    try:
        return asyncio.run(run_stages(Container(conn), stages, only, purge, report))
    finally:
        conn.close()
