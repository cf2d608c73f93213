"""Politicians API client."""

from parliament_client.politicians.client import PoliticiansClient
from parliament_client.politicians.schemas import MembershipSchema

__all__ = ["PoliticiansClient", "MembershipSchema"]
