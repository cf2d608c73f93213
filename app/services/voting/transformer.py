"""Vote transformer - raw API ballots into normalized Vote rows."""

import datetime as dt
from dataclasses import dataclass, field

from loguru import logger

from app.models import Ballot, PartyPosition, Vote, VoteResult, normalize_party, same_party
from app.repositories import LegislatorRepository, SessionRepository
from app.services.reconciliation import EntityReconciler, PoliticianRef, parse_vote_url
from parliament_client.votes.schemas import PartyVoteSchema, VoteDetailSchema

_BALLOTS = {
    "yes": Ballot.YEA,
    "yea": Ballot.YEA,
    "yay": Ballot.YEA,
    "no": Ballot.NAY,
    "nay": Ballot.NAY,
    "paired": Ballot.PAIRED,
    "abstain": Ballot.ABSTAINED,
    "abstained": Ballot.ABSTAINED,
}

_RESULTS = {
    "passed": VoteResult.AGREED_TO,
    "agreed to": VoteResult.AGREED_TO,
    "agreed": VoteResult.AGREED_TO,
    "failed": VoteResult.NEGATIVED,
    "negatived": VoteResult.NEGATIVED,
    "defeated": VoteResult.NEGATIVED,
    "tie": VoteResult.TIE,
}


def map_ballot(value: str | None) -> Ballot:
    """Unknown values ("Didn't vote", blanks) are Not Voting."""
    return _BALLOTS.get((value or "").strip().lower(), Ballot.NOT_VOTING)


def map_result(value: str | None) -> VoteResult:
    return _RESULTS.get((value or "").strip().lower(), VoteResult.NEGATIVED)


def party_position(party_votes: list[PartyVoteSchema], legislator_party: str | None) -> PartyPosition:
    """How the legislator's party voted as a block, from the per-party tally."""
    if normalize_party(legislator_party) is None:
        return PartyPosition.FREE_VOTE
    for line in party_votes:
        if line.party is None:
            continue
        if same_party(legislator_party, line.party.short_name) or same_party(legislator_party, line.party.name):
            ballot = map_ballot(line.vote)
            if ballot == Ballot.YEA:
                return PartyPosition.FOR
            if ballot == Ballot.NAY:
                return PartyPosition.AGAINST
            return PartyPosition.FREE_VOTE
    return PartyPosition.FREE_VOTE


def resolve_date(*candidates: dt.date | None) -> dt.date | None:
    """First available date, in order of preference."""
    return next((d for d in candidates if d is not None), None)


@dataclass
class VoteContext:
    """What every ballot of one vote shares."""

    vote_id: str
    date: dt.date | None
    result: VoteResult
    bill_id: int | None = None
    bill_number: str | None = None
    motion_title: str | None = None
    sponsor_party: str | None = None
    parliament_number: int | None = None
    session_number: int | None = None
    party_votes: list[PartyVoteSchema] = field(default_factory=list)


class VoteTransformer:
    """Builds Vote rows; the date must survive the fallback chain or the vote is dropped."""

    def __init__(
        self,
        reconciler: EntityReconciler,
        legislator_repo: LegislatorRepository,
        session_repo: SessionRepository,
    ):
        self._reconciler = reconciler
        self._legislators = legislator_repo
        self._sessions = session_repo

    def sponsor_party(self, sponsor: PoliticianRef | None) -> str | None:
        """Party of the bill's sponsor, read from the local legislator row."""
        legislator_id = self._reconciler.resolve_legislator(sponsor)
        if legislator_id is None:
            return None
        party = self._legislators.party_of(legislator_id)
        canonical = normalize_party(party)
        return canonical.value if canonical else party

    def session_start(self, vote_id: str) -> dt.date | None:
        parsed = parse_vote_url(vote_id)
        if parsed is None:
            return None
        return self._sessions.start_date(parsed[0], parsed[1])

    def context(
        self,
        vote_id: str,
        detail: VoteDetailSchema | None,
        *,
        own_date: dt.date | None = None,
        bill_id: int | None = None,
        bill_number: str | None = None,
        bill_introduced: dt.date | None = None,
        sponsor_party: str | None = None,
        motion_title: str | None = None,
    ) -> VoteContext:
        """Resolve vote-level fields once per vote.

        Date: the vote's own date, then the bill's introduction date, then
        the start of the vote's session. ``date`` stays None when all three
        are missing.
        """
        parsed = parse_vote_url(vote_id)
        vote_date = resolve_date(
            detail.date if detail else None,
            own_date,
            bill_introduced,
            self.session_start(vote_id),
        )
        if vote_date is None:
            logger.warning("Dropping vote {} (bill {}): no date from vote, bill or session", vote_id, bill_number or "-")

        return VoteContext(
            vote_id=vote_id,
            date=vote_date,
            result=map_result(detail.result if detail else None),
            bill_id=bill_id,
            bill_number=bill_number,
            motion_title=motion_title or (detail.description if detail else None),
            sponsor_party=sponsor_party,
            parliament_number=parsed[0] if parsed else None,
            session_number=parsed[1] if parsed else None,
            party_votes=detail.party_votes if detail else [],
        )

    def transform(self, ballot: str | None, legislator_id: int, ctx: VoteContext) -> Vote | None:
        """One legislator's ballot as a Vote row, None when the vote has no date."""
        if ctx.date is None:
            return None
        return Vote(
            vote_id=ctx.vote_id,
            legislator_id=legislator_id,
            date=ctx.date,
            ballot=map_ballot(ballot),
            result=ctx.result,
            bill_id=ctx.bill_id,
            bill_number=ctx.bill_number,
            motion_title=ctx.motion_title,
            party_position=party_position(ctx.party_votes, self._legislators.party_of(legislator_id)),
            sponsor_party=ctx.sponsor_party,
            parliament_number=ctx.parliament_number,
            session_number=ctx.session_number,
        )
