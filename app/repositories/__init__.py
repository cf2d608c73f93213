"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheRepository, ResponseCache
from app.repositories.core import LegislatorRepository, SessionRepository
from app.repositories.db import (
    get_write_connection,
    init_tables,
)
from app.repositories.legislation import BillRepository, MotionRepository, SponsorshipRepository
from app.repositories.transaction import BatchTransaction, RecordScope
from app.repositories.voting import LoyaltyRepository, VoteRepository

__all__ = [
    # DB
    "init_tables",
    "get_write_connection",
    # Base
    "BaseRepository",
    "BatchTransaction",
    "RecordScope",
    # Common
    "CacheRepository",
    "ResponseCache",
    # Core
    "LegislatorRepository",
    "SessionRepository",
    # Legislation
    "BillRepository",
    "MotionRepository",
    "SponsorshipRepository",
    # Voting
    "VoteRepository",
    "LoyaltyRepository",
]
