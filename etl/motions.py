"""Motion ETL - divisions without a bill, from the House of Commons feed."""

import xml.etree.ElementTree as ET

import httpx
from loguru import logger

from app.container import Container
from app.models import Motion, ParliamentSession
from etl.helpers import SyncStats
from parliament_client import ApiError, CommonsClient, DivisionSchema


def motion_from_division(division: DivisionSchema) -> Motion:
    return Motion(
        parliament_number=division.parliament_number,
        session_number=division.session_number,
        division_number=division.division_number,
        subject=division.subject,
        date=division.date,
        result=division.result,
        yeas=division.yeas,
        nays=division.nays,
        paired=division.paired,
        document_type=division.document_type,
    )


async def sync_motions(client: CommonsClient, container: Container, session: ParliamentSession) -> SyncStats:
    """Store new motions of the current parliament; bill divisions come through the bill sync.

    The Commons feed is a secondary source: when it is down the stage is
    counted as errored and the run moves on.
    """
    stats = SyncStats("motions")
    try:
        divisions = await client.divisions()
    except (ApiError, httpx.HTTPError, ET.ParseError) as e:
        logger.warning("Motions: Commons feed unavailable, stage skipped: {}", e)
        stats.errors += 1
        return stats

    motions = []
    for division in divisions:
        if division.parliament_number != session.parliament_number:
            continue
        if division.bill_number:
            continue
        motions.append(motion_from_division(division))

    logger.info(
        "Motions: {} divisions in feed, {} motions for parliament {}",
        len(divisions),
        len(motions),
        session.parliament_number,
    )
    stats.inserted = container.motions.insert_many(motions)
    stats.skipped = len(motions) - stats.inserted
    logger.info("Motions: +{} new", stats.inserted)
    return stats
