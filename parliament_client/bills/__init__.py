"""Bills API client."""

from parliament_client.bills.client import BillsClient
from parliament_client.bills.schemas import BillSchema

__all__ = ["BillsClient", "BillSchema"]
