"""Bill ETL - sync bills and their sponsors for the current session."""

import asyncio

import httpx
from loguru import logger
from pydantic import ValidationError

from app.container import Container
from app.models import ParliamentSession
from app.repositories import BatchTransaction
from app.services.reconciliation import PoliticianRef
from etl.details import CachedFetcher
from etl.helpers import SyncStats, batched, gather_all, log_batch
from etl.ingest import bill_from_schema, save_bill
from parliament_client import ApiUnavailableError, BillSchema, ParliamentClient, safe_request
from settings import BATCH_DELAY, BILL_BATCH_SIZE


async def _detailed(fetcher: CachedFetcher, listed: BillSchema) -> BillSchema | None:
    """Listing entries lack sponsor and status; fetch detail for those."""
    if listed.is_detailed:
        return listed
    return await safe_request(fetcher.bill(listed.detail_url))


async def _listed_bills(
    client: ParliamentClient,
    container: Container,
    session: ParliamentSession,
    bill_number: str | None,
) -> list[BillSchema]:
    if bill_number:
        payload = await client.bill(f"/bills/{session.code}/{bill_number.upper()}/")
        if payload is None:
            logger.warning("Bill {} not found in session {}", bill_number, session.code)
            return []
        return [BillSchema.model_validate(payload)]

    since = max(container.bills.latest_introduced_date(session.code) or session.start_date, session.start_date)
    logger.info("Bills: fetching introduced since {}", since)
    try:
        listing = await client.bills_introduced_since(since)
    except httpx.HTTPError as e:
        raise ApiUnavailableError(f"Bill listing unavailable: {e}") from e
    bills = []
    for item in listing:
        try:
            bill = BillSchema.model_validate(item)
        except ValidationError as e:
            logger.warning("Skipping malformed bill {}: {}", item.get("number"), e)
            continue
        if bill.session == session.code:
            bills.append(bill)
    return bills


async def sync_bills(
    client: ParliamentClient,
    container: Container,
    session: ParliamentSession,
    bill_number: str | None = None,
    batch_size: int = BILL_BATCH_SIZE,
) -> SyncStats:
    """Sync bills introduced in the current session (incremental on introduction date)."""
    stats = SyncStats("bills")
    fetcher = CachedFetcher(client, container.cache)

    bills = await _listed_bills(client, container, session, bill_number)
    if not bills:
        logger.info("Bills: nothing new")
        return stats

    for batch_num, total, batch in batched(bills, batch_size):
        log_batch("Bills", batch_num, total)
        details = await gather_all([_detailed(fetcher, b) for b in batch])

        with BatchTransaction(container.conn, "bills") as tx:
            for listed, schema in zip(batch, details, strict=True):
                if schema is None:
                    stats.errors += 1
                    logger.warning("Bill {}: detail unavailable, skipped", listed.number)
                    continue
                bill = bill_from_schema(schema)
                sponsor_id = None
                if schema.sponsor_politician_url:
                    sponsor_ref = PoliticianRef(url=schema.sponsor_politician_url)
                    sponsor_id = container.reconciler.resolve_legislator(sponsor_ref)
                    if sponsor_id is None:
                        stats.unresolved += 1
                saved = tx.run(
                    f"bill {bill.bill_number}",
                    lambda scope, b=bill, s=sponsor_id: save_bill(container, scope, b, s),
                )
                if saved is None:
                    stats.errors += 1
                elif saved[1]:
                    stats.inserted += 1
                else:
                    stats.updated += 1

        if batch_num < total:
            await asyncio.sleep(BATCH_DELAY)

    logger.info("Bills: +{} new, {} updated", stats.inserted, stats.updated)
    return stats
