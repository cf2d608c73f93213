"""Parliament API client package."""

from parliament_client.base import BaseClient, RetryPolicy, safe_request
from parliament_client.bills import BillsClient, BillSchema
from parliament_client.client import ParliamentClient
from parliament_client.commons import CommonsClient, DivisionSchema
from parliament_client.errors import ApiError, ApiUnavailableError, MissingSessionError
from parliament_client.politicians import MembershipSchema, PoliticiansClient
from parliament_client.votes import BallotSchema, PartyVoteSchema, VoteDetailSchema, VotesClient

__all__ = [
    # Base
    "BaseClient",
    "RetryPolicy",
    "safe_request",
    # Errors
    "ApiError",
    "ApiUnavailableError",
    "MissingSessionError",
    # Clients
    "ParliamentClient",
    "VotesClient",
    "BillsClient",
    "PoliticiansClient",
    "CommonsClient",
    # Schemas
    "BallotSchema",
    "PartyVoteSchema",
    "VoteDetailSchema",
    "BillSchema",
    "MembershipSchema",
    "DivisionSchema",
]
