"""Bills API client."""

import datetime as dt

from parliament_client.base import BaseClient
from settings import MAX_BILLS_PER_SYNC


class BillsClient(BaseClient):
    """Client for openparliament.ca bill endpoints."""

    async def bills_introduced_since(self, since: dt.date, max_items: int = MAX_BILLS_PER_SYNC) -> list[dict]:
        """GET /bills/?introduced__gte={date} - bills introduced on or after a date."""
        return await self.fetch_all("/bills/", {"introduced__gte": since.isoformat()}, max_items=max_items)

    async def bill(self, bill_url: str) -> dict | None:
        """GET /bills/{session}/{number}/ - bill detail."""
        return await self.fetch_resource(bill_url)
