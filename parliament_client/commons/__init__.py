"""House of Commons votes feed."""

from parliament_client.commons.client import CommonsClient, parse_divisions
from parliament_client.commons.schemas import DivisionSchema

__all__ = ["CommonsClient", "DivisionSchema", "parse_divisions"]
