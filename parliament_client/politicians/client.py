"""Politicians API client."""

from parliament_client.base import BaseClient


class PoliticiansClient(BaseClient):
    """Client for openparliament.ca politician endpoints."""

    async def membership(self, membership_url: str) -> dict | None:
        """GET /politicians/roles/{id}/ - membership (party, riding, period)."""
        return await self.fetch_resource(membership_url)
