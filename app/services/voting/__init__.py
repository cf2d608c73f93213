"""Voting services - vote transformation and party loyalty."""

from app.services.voting.loyalty import PartyLoyaltyCalculator, classify, tally
from app.services.voting.transformer import (
    VoteContext,
    VoteTransformer,
    map_ballot,
    map_result,
    party_position,
    resolve_date,
)

__all__ = [
    "PartyLoyaltyCalculator",
    "classify",
    "tally",
    "VoteContext",
    "VoteTransformer",
    "map_ballot",
    "map_result",
    "party_position",
    "resolve_date",
]
