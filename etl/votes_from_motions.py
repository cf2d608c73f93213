"""Motion-linked votes - the vote round of each stored motion."""

import asyncio

from loguru import logger

from app.container import Container
from app.models import Motion, ParliamentSession
from etl.details import CachedFetcher
from etl.helpers import SyncStats, batched, gather_all, log_batch, watermark
from etl.ingest import CollectedRound, admit, ballots_to_votes, persist_rounds
from parliament_client import ParliamentClient, safe_request
from settings import BATCH_DELAY, BATCH_SIZE


async def _collect_motion(
    fetcher: CachedFetcher,
    container: Container,
    session: ParliamentSession,
    motion: Motion,
    stats: SyncStats,
) -> CollectedRound:
    vote_id = motion.vote_id
    collected = CollectedRound(vote_id=vote_id)
    mark = watermark(container.votes.latest_date_for_vote(vote_id), session)
    if motion.date is not None and not mark.admits(motion.date):
        stats.skipped += 1
        return collected

    detail = await safe_request(fetcher.vote(vote_id))
    if detail is None:
        # Not mirrored by openparliament.ca yet; picked up on a later run
        logger.debug("Motion {}: no vote detail yet", vote_id)
        stats.skipped += 1
        return collected

    ctx = container.transformer.context(vote_id, detail, own_date=motion.date, motion_title=motion.subject)
    if not admit(ctx, mark, stats):
        return collected

    ballots = await safe_request(fetcher.ballots_for_vote(vote_id, detail.ballots_url))
    if ballots is None:
        stats.errors += 1
        return collected
    collected.votes = ballots_to_votes(container, ctx, ballots, stats)
    return collected


async def sync_votes_from_motions(
    client: ParliamentClient,
    container: Container,
    session: ParliamentSession,
    division_number: int | None = None,
    batch_size: int = BATCH_SIZE,
) -> SyncStats:
    """Votes on motions of the current session, incremental per motion."""
    stats = SyncStats("votes-motions")
    fetcher = CachedFetcher(client, container.cache)

    motions = container.motions.for_session(session.parliament_number, session.session_number, division_number)
    logger.info("Votes from motions: {} motions in session {}", len(motions), session.code)

    for batch_num, total, batch in batched(motions, batch_size):
        log_batch("Votes from motions", batch_num, total)
        rounds = await gather_all([_collect_motion(fetcher, container, session, m, stats) for m in batch])
        persist_rounds(container, list(rounds), stats, "votes motions")
        if batch_num < total:
            await asyncio.sleep(BATCH_DELAY)

    logger.info("{} (cache hits {}, misses {})", stats, fetcher.hits, fetcher.misses)
    return stats
