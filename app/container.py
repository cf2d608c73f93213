"""Dependency container - repositories and services for one sync run."""

import duckdb

from app.repositories import (
    BillRepository,
    CacheRepository,
    LegislatorRepository,
    LoyaltyRepository,
    MotionRepository,
    SessionRepository,
    SponsorshipRepository,
    VoteRepository,
)
from app.repositories.common.cache import ResponseCache
from app.services.reconciliation import EntityReconciler
from app.services.voting import PartyLoyaltyCalculator, VoteTransformer


class Container:
    """Holds every repository and service bound to one connection.

    All repositories share the connection, so lookups made while a batch
    transaction is open see the batch's own writes.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection, cache: ResponseCache | None = None):
        self.conn = conn

        # Repositories
        self.legislators = LegislatorRepository(conn)
        self.sessions = SessionRepository(conn)
        self.bills = BillRepository(conn)
        self.sponsorships = SponsorshipRepository(conn)
        self.motions = MotionRepository(conn)
        self.votes = VoteRepository(conn)
        self.loyalty_repo = LoyaltyRepository(conn)
        self.cache: ResponseCache = cache if cache is not None else CacheRepository(conn)

        # Services (with injected repos)
        self.reconciler = EntityReconciler(
            legislator_repo=self.legislators,
            bill_repo=self.bills,
        )
        self.transformer = VoteTransformer(
            reconciler=self.reconciler,
            legislator_repo=self.legislators,
            session_repo=self.sessions,
        )
        self.loyalty = PartyLoyaltyCalculator(
            vote_repo=self.votes,
            legislator_repo=self.legislators,
            loyalty_repo=self.loyalty_repo,
        )
