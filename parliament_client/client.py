"""Combined openparliament.ca client sharing one connection pool and pacing."""

from parliament_client.bills.client import BillsClient
from parliament_client.politicians.client import PoliticiansClient
from parliament_client.votes.client import VotesClient


class ParliamentClient(VotesClient, BillsClient, PoliticiansClient):
    """All openparliament.ca endpoints behind one rate limit."""
