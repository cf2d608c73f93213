"""Shared steps of the vote pipelines: ballots to rows, and batch persistence."""

import datetime as dt
from dataclasses import dataclass, field

from loguru import logger

from app.container import Container
from app.models import Bill, SponsorshipRole, Vote
from app.repositories import BatchTransaction, RecordScope
from app.services.reconciliation import BillRef, PoliticianRef
from app.services.voting import VoteContext
from etl.details import CachedFetcher
from etl.helpers import SyncStats, Watermark
from parliament_client import BallotSchema, BillSchema, VoteDetailSchema, safe_request


@dataclass
class CollectedRound:
    """Rows ready to write for one vote round.

    ``new_bill`` is set when the round references a bill that is not stored
    yet; it is written first and its id is copied onto the votes.
    """

    vote_id: str
    votes: list[Vote] = field(default_factory=list)
    new_bill: Bill | None = None
    sponsor_id: int | None = None


@dataclass
class BillContext:
    bill_id: int | None = None
    bill_number: str | None = None
    introduced: dt.date | None = None
    sponsor_party: str | None = None
    new_bill: Bill | None = None
    sponsor_id: int | None = None


def ballots_to_votes(
    container: Container,
    ctx: VoteContext,
    ballots: list[BallotSchema],
    stats: SyncStats,
    legislator_id: int | None = None,
) -> list[Vote]:
    """Reconcile each ballot's politician and transform it.

    ``legislator_id`` is given when the ballots come from one politician's
    own listing.
    """
    votes = []
    for ballot in ballots:
        target = legislator_id
        if target is None:
            target = container.reconciler.resolve_legislator(
                PoliticianRef(url=ballot.politician_url, name=ballot.politician_name)
            )
        if target is None:
            stats.unresolved += 1
            continue
        vote = container.transformer.transform(ballot.ballot, target, ctx)
        if vote is not None:
            votes.append(vote)
    return votes


def admit(ctx: VoteContext, mark: Watermark, stats: SyncStats, ballots: int = 1) -> bool:
    """Date and watermark gate applied before ballots are transformed."""
    if ctx.date is None:
        stats.dropped += ballots
        return False
    if not mark.admits(ctx.date):
        stats.skipped += ballots
        return False
    return True


async def bill_context(
    fetcher: CachedFetcher,
    container: Container,
    detail: VoteDetailSchema,
) -> BillContext:
    """Bill linkage of a vote: local id, number, introduction date, sponsor party.

    Bills seen for the first time are returned as ``new_bill`` so the
    persistence step can create them.
    """
    ref = BillRef.from_url(detail.bill_url)
    if ref is None:
        return BillContext()

    schema = await safe_request(fetcher.bill(detail.bill_url))
    if schema is not None:
        ref = BillRef(
            legisinfo_id=schema.legisinfo_id,
            bill_number=schema.number.upper(),
            session=schema.session or ref.session,
        )

    ctx = BillContext(bill_number=ref.bill_number)
    ctx.bill_id = container.reconciler.resolve_bill_ref(ref)
    if ctx.bill_id is not None:
        stored = container.bills.get(ctx.bill_id)
        if stored is not None:
            ctx.introduced = stored.introduced_date
    if schema is None:
        return ctx

    ctx.introduced = schema.introduced or ctx.introduced
    ctx.sponsor_party = await fetcher.sponsor_party(
        container.transformer,
        schema.sponsor_politician_url,
        schema.sponsor_politician_membership_url,
    )
    if ctx.bill_id is None:
        ctx.new_bill = bill_from_schema(schema)
        ctx.sponsor_id = container.reconciler.resolve_legislator(PoliticianRef(url=schema.sponsor_politician_url))
    return ctx


def _dedupe(votes: list[Vote]) -> list[Vote]:
    seen: dict[tuple[str, int], Vote] = {}
    for vote in votes:
        seen[(vote.vote_id, vote.legislator_id)] = vote
    return list(seen.values())


def persist_rounds(container: Container, rounds: list[CollectedRound], stats: SyncStats, label: str) -> None:
    """Write a batch in one transaction; every bill and vote is its own rollback unit."""
    if not any(r.votes or r.new_bill for r in rounds):
        return

    with BatchTransaction(container.conn, label) as tx:
        for collected in rounds:
            votes = _dedupe(collected.votes)
            if collected.new_bill is not None:
                bill = collected.new_bill
                saved = tx.run(
                    f"bill {bill.bill_number}",
                    lambda scope, b=bill, s=collected.sponsor_id: save_bill(container, scope, b, s),
                )
                if saved is None:
                    stats.errors += 1
                else:
                    for vote in votes:
                        vote.bill_id = saved[0]
            for vote in votes:
                created = tx.run(
                    f"{vote.vote_id} legislator {vote.legislator_id}",
                    lambda scope, v=vote: container.votes.upsert(scope, v),
                )
                if created is None:
                    stats.errors += 1
                elif created:
                    stats.inserted += 1
                else:
                    stats.updated += 1
    logger.debug("{}: {} rounds written", label, len(rounds))


def save_bill(container: Container, scope: RecordScope, bill: Bill, sponsor_id: int | None) -> tuple[int, bool]:
    """Upsert a bill and its sponsor link inside one record scope: (bill_id, created)."""
    bill_id, created = container.bills.upsert(scope, bill)
    if sponsor_id is not None:
        container.sponsorships.add(scope, sponsor_id, bill_id, SponsorshipRole.SPONSOR)
    return bill_id, created


def bill_from_schema(schema: BillSchema) -> Bill:
    parliament_number = session_number = None
    parts = (schema.session or "").split("-")
    if len(parts) == 2 and all(p.isdigit() for p in parts):
        parliament_number, session_number = int(parts[0]), int(parts[1])
    return Bill(
        bill_number=schema.number.upper(),
        session=schema.session,
        parliament_number=parliament_number,
        session_number=session_number,
        legisinfo_id=schema.legisinfo_id,
        title=schema.title,
        introduced_date=schema.introduced,
        law=schema.law,
        private_member_bill=schema.private_member_bill,
        status_code=schema.status_code,
        sponsor_politician_url=schema.sponsor_politician_url,
        sponsor_membership_url=schema.sponsor_politician_membership_url,
    )
