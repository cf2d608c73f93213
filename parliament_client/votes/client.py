"""Votes API client."""

from parliament_client.base import BaseClient
from settings import MAX_BALLOTS_PER_LEGISLATOR, MAX_BALLOTS_PER_VOTE


class VotesClient(BaseClient):
    """Client for openparliament.ca vote endpoints."""

    async def ballots_for_politician(self, slug: str, max_items: int = MAX_BALLOTS_PER_LEGISLATOR) -> list[dict]:
        """GET /votes/ballots/?politician={slug} - a politician's ballots."""
        return await self.fetch_all("/votes/ballots/", {"politician": slug}, max_items=max_items)

    async def ballots_for_vote(
        self,
        vote_url: str,
        ballots_url: str | None = None,
        max_items: int = MAX_BALLOTS_PER_VOTE,
    ) -> list[dict]:
        """GET /votes/ballots/?vote={vote_url} - every ballot of one vote."""
        if ballots_url:
            return await self.fetch_all(ballots_url, max_items=max_items)
        return await self.fetch_all("/votes/ballots/", {"vote": vote_url}, max_items=max_items)

    async def vote(self, vote_url: str) -> dict | None:
        """GET /votes/{session}/{number}/ - vote detail."""
        return await self.fetch_resource(vote_url)
