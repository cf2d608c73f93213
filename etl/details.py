"""Write-through response cache in front of the detail endpoints."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from loguru import logger
from pydantic import ValidationError

from app.models import normalize_party
from app.repositories import ResponseCache
from app.services.reconciliation import PoliticianRef
from app.services.voting import VoteTransformer
from parliament_client import (
    BallotSchema,
    BillSchema,
    MembershipSchema,
    ParliamentClient,
    VoteDetailSchema,
    safe_request,
)
from settings import (
    BALLOT_LIST_TTL_HOURS,
    BILL_DETAIL_TTL_HOURS,
    MEMBERSHIP_TTL_HOURS,
    VOTE_DETAIL_TTL_HOURS,
)

BALLOT_LIST_TTL = timedelta(hours=BALLOT_LIST_TTL_HOURS)
BILL_DETAIL_TTL = timedelta(hours=BILL_DETAIL_TTL_HOURS)
VOTE_DETAIL_TTL = timedelta(hours=VOTE_DETAIL_TTL_HOURS)
MEMBERSHIP_TTL = timedelta(hours=MEMBERSHIP_TTL_HOURS)


def _ballots(payload: list[dict] | None) -> list[BallotSchema]:
    ballots = []
    for item in payload or []:
        try:
            ballots.append(BallotSchema.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping malformed ballot {}: {}", item.get("vote_url"), e)
    return ballots


class CachedFetcher:
    """Detail fetches that read the cache first and fill it on a miss.

    Concurrent requests for one key wait for the first fetch instead of
    issuing their own. Not-found answers are not cached.
    """

    def __init__(self, client: ParliamentClient, cache: ResponseCache):
        self._client = client
        self._cache = cache
        self._locks: dict[str, asyncio.Lock] = {}
        self.hits = 0
        self.misses = 0

    async def _cached(self, key: str, ttl: timedelta, fetch: Callable[[], Awaitable[Any]]) -> Any | None:
        async with self._locks.setdefault(key, asyncio.Lock()):
            payload = self._cache.get(key)
            if payload is not None:
                self.hits += 1
                return payload
            self.misses += 1
            payload = await fetch()
            if payload:
                self._cache.put(key, payload, ttl)
            return payload

    async def vote(self, vote_url: str) -> VoteDetailSchema | None:
        payload = await self._cached(vote_url, VOTE_DETAIL_TTL, lambda: self._client.vote(vote_url))
        return VoteDetailSchema.model_validate(payload) if payload else None

    async def bill(self, bill_url: str) -> BillSchema | None:
        payload = await self._cached(bill_url, BILL_DETAIL_TTL, lambda: self._client.bill(bill_url))
        return BillSchema.model_validate(payload) if payload else None

    async def membership(self, membership_url: str) -> MembershipSchema | None:
        payload = await self._cached(membership_url, MEMBERSHIP_TTL, lambda: self._client.membership(membership_url))
        return MembershipSchema.model_validate(payload) if payload else None

    async def ballots_for_politician(self, slug: str) -> list[BallotSchema]:
        payload = await self._cached(
            f"ballots:politician:{slug}",
            BALLOT_LIST_TTL,
            lambda: self._client.ballots_for_politician(slug),
        )
        return _ballots(payload)

    async def ballots_for_vote(self, vote_url: str, ballots_url: str | None = None) -> list[BallotSchema]:
        # A recorded division never changes, so its ballots live as long as its detail
        payload = await self._cached(
            f"ballots:vote:{vote_url}",
            VOTE_DETAIL_TTL,
            lambda: self._client.ballots_for_vote(vote_url, ballots_url),
        )
        return _ballots(payload)

    async def sponsor_party(
        self,
        transformer: VoteTransformer,
        sponsor_url: str | None,
        membership_url: str | None = None,
    ) -> str | None:
        """Sponsor's party from the local legislator, else from their membership record."""
        party = transformer.sponsor_party(PoliticianRef(url=sponsor_url)) if sponsor_url else None
        if party is not None or not membership_url:
            return party

        membership = await safe_request(self.membership(membership_url))
        if membership is None or not membership.party_name:
            return None
        canonical = normalize_party(membership.party_name)
        logger.debug("Sponsor {} party from membership: {}", sponsor_url, membership.party_name)
        return canonical.value if canonical else membership.party_name
