"""Voting domain models - votes, ballots and loyalty entities."""

from app.models.voting.entities import (
    Ballot,
    LoyaltyBucket,
    PartyLoyaltyStats,
    PartyPosition,
    Vote,
    VoteResult,
)
from app.models.voting.loyalty import PARTY_LOYALTY_DDL
from app.models.voting.vote import VOTE_DDL, VOTE_INDEXES

__all__ = [
    "VOTE_DDL",
    "VOTE_INDEXES",
    "PARTY_LOYALTY_DDL",
    "Ballot",
    "VoteResult",
    "PartyPosition",
    "LoyaltyBucket",
    "Vote",
    "PartyLoyaltyStats",
]
