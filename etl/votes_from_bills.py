"""Bill-linked votes - every recorded vote round of each current-session bill."""

import asyncio

from loguru import logger

from app.container import Container
from app.models import Bill, ParliamentSession
from etl.details import CachedFetcher
from etl.helpers import SyncStats, Watermark, batched, gather_all, watermark
from etl.ingest import CollectedRound, admit, ballots_to_votes, persist_rounds
from parliament_client import ParliamentClient, safe_request
from settings import BATCH_DELAY, BATCH_SIZE, MAX_VOTES_PER_BILL


async def _collect_round(
    fetcher: CachedFetcher,
    container: Container,
    bill: Bill,
    sponsor_party: str | None,
    vote_url: str,
    mark: Watermark,
    stats: SyncStats,
) -> CollectedRound:
    collected = CollectedRound(vote_id=vote_url)
    detail = await safe_request(fetcher.vote(vote_url))
    if detail is None:
        stats.errors += 1
        return collected

    ctx = container.transformer.context(
        vote_url,
        detail,
        bill_id=bill.id,
        bill_number=bill.bill_number,
        bill_introduced=bill.introduced_date,
        sponsor_party=sponsor_party,
    )
    if not admit(ctx, mark, stats):
        return collected

    ballots = await safe_request(fetcher.ballots_for_vote(vote_url, detail.ballots_url))
    if ballots is None:
        stats.errors += 1
        return collected
    collected.votes = ballots_to_votes(container, ctx, ballots, stats)
    return collected


async def _sync_bill(
    fetcher: CachedFetcher,
    container: Container,
    session: ParliamentSession,
    bill: Bill,
    batch_size: int,
    stats: SyncStats,
) -> None:
    schema = await safe_request(fetcher.bill(f"/bills/{bill.session}/{bill.bill_number}/"))
    if schema is None:
        stats.errors += 1
        return

    vote_urls = [u for u in schema.vote_urls if u.startswith(session.votes_prefix)]
    if len(vote_urls) > MAX_VOTES_PER_BILL:
        logger.warning(
            "Bill {}: {} vote rounds, keeping first {}", bill.bill_number, len(vote_urls), MAX_VOTES_PER_BILL
        )
        vote_urls = vote_urls[:MAX_VOTES_PER_BILL]
    if not vote_urls:
        return

    mark = watermark(container.votes.latest_date_for_bill(bill.id), session)
    sponsor_party = await fetcher.sponsor_party(
        container.transformer,
        schema.sponsor_politician_url or bill.sponsor_politician_url,
        schema.sponsor_politician_membership_url or bill.sponsor_membership_url,
    )
    logger.debug("Bill {}: {} vote rounds after {}", bill.bill_number, len(vote_urls), mark.value)

    for batch_num, total, batch in batched(vote_urls, batch_size):
        rounds = await gather_all(
            [_collect_round(fetcher, container, bill, sponsor_party, url, mark, stats) for url in batch]
        )
        persist_rounds(container, list(rounds), stats, f"votes {bill.bill_number}")
        if batch_num < total:
            await asyncio.sleep(BATCH_DELAY)


async def sync_votes_from_bills(
    client: ParliamentClient,
    container: Container,
    session: ParliamentSession,
    bill_number: str | None = None,
    batch_size: int = BATCH_SIZE,
) -> SyncStats:
    """Votes on the current session's bills, incremental per bill."""
    stats = SyncStats("votes-bills")
    fetcher = CachedFetcher(client, container.cache)

    bills = container.bills.for_session(session.code, bill_number)
    if bill_number and not bills:
        logger.warning("Bill {} not stored for session {}; run the bill sync first", bill_number, session.code)
    logger.info("Votes from bills: {} bills in session {}", len(bills), session.code)

    for i, bill in enumerate(bills, 1):
        if i % 25 == 0:
            logger.info("Votes from bills: {}/{} bills", i, len(bills))
        await _sync_bill(fetcher, container, session, bill, batch_size, stats)
        await asyncio.sleep(BATCH_DELAY)

    logger.info("{} (cache hits {}, misses {})", stats, fetcher.hits, fetcher.misses)
    return stats
