"""Voting domain entities - normalized votes and loyalty results."""

import datetime as dt
from dataclasses import dataclass
from enum import StrEnum

from app.models.common import BaseEntity


class Ballot(StrEnum):
    """A legislator's recorded position on one division."""

    YEA = "Yea"
    NAY = "Nay"
    PAIRED = "Paired"
    ABSTAINED = "Abstained"
    NOT_VOTING = "Not Voting"


class VoteResult(StrEnum):
    AGREED_TO = "Agreed To"
    NEGATIVED = "Negatived"
    TIE = "Tie"


class PartyPosition(StrEnum):
    """Collective stance of the legislator's party on the division."""

    FOR = "For"
    AGAINST = "Against"
    FREE_VOTE = "Free Vote"


class LoyaltyBucket(StrEnum):
    WITH_PARTY = "with_party"
    AGAINST_PARTY = "against_party"
    FREE = "free"
    ABSTAINED = "abstained"
    EXCLUDED = "excluded"


@dataclass
class Vote(BaseEntity):
    """One row of the vote table."""

    vote_id: str
    legislator_id: int
    date: dt.date
    ballot: Ballot
    result: VoteResult
    bill_id: int | None = None
    bill_number: str | None = None
    motion_title: str | None = None
    party_position: PartyPosition | None = None
    sponsor_party: str | None = None
    parliament_number: int | None = None
    session_number: int | None = None


@dataclass
class PartyLoyaltyStats(BaseEntity):
    """Four-way partition of a legislator's bill votes.

    ``excluded_votes`` is informational: it explains why ``total_votes`` can
    be lower than the raw vote count and is never part of any percentage.
    """

    legislator_id: int
    party: str | None
    with_party_votes: int = 0
    against_party_votes: int = 0
    free_votes: int = 0
    abstained_paired_votes: int = 0
    excluded_votes: int = 0

    @property
    def total_votes(self) -> int:
        return self.with_party_votes + self.against_party_votes + self.free_votes + self.abstained_paired_votes

    def _pct(self, count: int) -> float:
        total = self.total_votes
        return round(count / total * 100, 2) if total else 0.0

    @property
    def loyalty_percentage(self) -> float:
        return self._pct(self.with_party_votes)

    @property
    def opposition_percentage(self) -> float:
        return self._pct(self.against_party_votes)

    @property
    def free_vote_percentage(self) -> float:
        return self._pct(self.free_votes)

    @property
    def abstained_percentage(self) -> float:
        return self._pct(self.abstained_paired_votes)
