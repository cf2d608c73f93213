"""Ballot feed votes - each legislator's own ballot listing."""

import asyncio

from loguru import logger

from app.container import Container
from app.models import Legislator, ParliamentSession
from app.services.reconciliation import name_to_slug
from etl.details import CachedFetcher
from etl.helpers import SyncStats, Watermark, batched, gather_all, watermark
from etl.ingest import CollectedRound, admit, ballots_to_votes, bill_context, persist_rounds
from parliament_client import BallotSchema, ParliamentClient, safe_request
from settings import BATCH_DELAY, BATCH_SIZE, MAX_BALLOTS_PER_LEGISLATOR


async def _collect_ballot(
    fetcher: CachedFetcher,
    container: Container,
    legislator: Legislator,
    ballot: BallotSchema,
    mark: Watermark,
    stats: SyncStats,
) -> CollectedRound:
    collected = CollectedRound(vote_id=ballot.vote_url)
    detail = await safe_request(fetcher.vote(ballot.vote_url))
    if detail is None:
        stats.errors += 1
        return collected

    bill = await bill_context(fetcher, container, detail)
    ctx = container.transformer.context(
        ballot.vote_url,
        detail,
        bill_id=bill.bill_id,
        bill_number=bill.bill_number,
        bill_introduced=bill.introduced,
        sponsor_party=bill.sponsor_party,
    )
    if not admit(ctx, mark, stats):
        return collected

    collected.votes = ballots_to_votes(container, ctx, [ballot], stats, legislator_id=legislator.id)
    collected.new_bill = bill.new_bill
    collected.sponsor_id = bill.sponsor_id
    return collected


def _pending_ballots(
    container: Container,
    session: ParliamentSession,
    legislator: Legislator,
    ballots: list[BallotSchema],
    stats: SyncStats,
) -> list[BallotSchema]:
    """One ballot per vote of the current session that is not stored yet."""
    pending: dict[str, BallotSchema] = {}
    for ballot in ballots:
        if not ballot.vote_url.startswith(session.votes_prefix):
            # Earlier sessions are entirely below the watermark
            stats.skipped += 1
            continue
        if ballot.vote_url in pending:
            continue
        if container.votes.exists(ballot.vote_url, legislator.id):
            stats.skipped += 1
            continue
        pending[ballot.vote_url] = ballot
    return list(pending.values())


async def _sync_legislator(
    fetcher: CachedFetcher,
    container: Container,
    session: ParliamentSession,
    legislator: Legislator,
    slug: str,
    batch_size: int,
    stats: SyncStats,
) -> None:
    ballots = await safe_request(fetcher.ballots_for_politician(slug))
    if ballots is None:
        stats.errors += 1
        return
    if not ballots:
        logger.debug("{}: no ballots for {}", legislator.name, slug)
        return
    if len(ballots) >= MAX_BALLOTS_PER_LEGISLATOR:
        logger.debug("{}: ballot listing capped at {}", legislator.name, MAX_BALLOTS_PER_LEGISLATOR)

    mark = watermark(container.votes.latest_date_for_legislator(legislator.id), session)
    pending = _pending_ballots(container, session, legislator, ballots, stats)
    logger.debug("{}: {} ballots, {} pending after {}", legislator.name, len(ballots), len(pending), mark.value)

    for batch_num, total, batch in batched(pending, batch_size):
        rounds = await gather_all([_collect_ballot(fetcher, container, legislator, b, mark, stats) for b in batch])
        persist_rounds(container, list(rounds), stats, f"votes {legislator.name}")
        if batch_num < total:
            await asyncio.sleep(BATCH_DELAY)


async def sync_votes_from_ballots(
    client: ParliamentClient,
    container: Container,
    session: ParliamentSession,
    legislator_name: str | None = None,
    batch_size: int = BATCH_SIZE,
) -> SyncStats:
    """Votes from every legislator's ballot listing, incremental per legislator."""
    stats = SyncStats("votes-ballots")
    fetcher = CachedFetcher(client, container.cache)

    if legislator_name:
        legislator = container.legislators.find_by_name(legislator_name)
        if legislator is None:
            logger.warning("Legislator not found: {}", legislator_name)
            stats.unresolved += 1
            return stats
        legislators = [legislator]
    else:
        legislators = container.legislators.all()
    logger.info("Votes from ballots: {} legislators", len(legislators))

    for i, legislator in enumerate(legislators, 1):
        if i % 25 == 0:
            logger.info("Votes from ballots: {}/{} legislators", i, len(legislators))
        slug = name_to_slug(legislator.name)
        await _sync_legislator(fetcher, container, session, legislator, slug, batch_size, stats)
        await asyncio.sleep(BATCH_DELAY)

    logger.info("{} (cache hits {}, misses {})", stats, fetcher.hits, fetcher.misses)
    return stats
