"""Votes API client."""

from parliament_client.votes.client import VotesClient
from parliament_client.votes.schemas import (
    BallotSchema,
    PartyRefSchema,
    PartyVoteSchema,
    VoteDetailSchema,
)

__all__ = [
    "VotesClient",
    "BallotSchema",
    "PartyRefSchema",
    "PartyVoteSchema",
    "VoteDetailSchema",
]
