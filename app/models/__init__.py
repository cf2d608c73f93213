"""Models package - DDL and entities for all domains."""

from app.models.common import API_CACHE_DDL, BaseEntity, utcnow
from app.models.core import (
    LEGISLATOR_DDL,
    LEGISLATOR_INDEXES,
    SESSION_DDL,
    Legislator,
    ParliamentSession,
    Party,
    normalize_party,
    same_party,
)
from app.models.legislation import (
    BILL_DDL,
    BILL_SEQUENCE_DDL,
    MOTION_DDL,
    SPONSORSHIP_DDL,
    Bill,
    Motion,
    SponsorshipRole,
)
from app.models.voting import (
    PARTY_LOYALTY_DDL,
    VOTE_DDL,
    VOTE_INDEXES,
    Ballot,
    LoyaltyBucket,
    PartyLoyaltyStats,
    PartyPosition,
    Vote,
    VoteResult,
)

ALL_DDL = [
    # Core
    LEGISLATOR_DDL,
    SESSION_DDL,
    # Legislation
    BILL_SEQUENCE_DDL,
    BILL_DDL,
    SPONSORSHIP_DDL,
    MOTION_DDL,
    # Voting
    VOTE_DDL,
    PARTY_LOYALTY_DDL,
    # Common
    API_CACHE_DDL,
    # Indexes
    *LEGISLATOR_INDEXES,
    *VOTE_INDEXES,
]

__all__ = [
    # Common
    "BaseEntity",
    "utcnow",
    "API_CACHE_DDL",
    # Core
    "LEGISLATOR_DDL",
    "SESSION_DDL",
    "Legislator",
    "ParliamentSession",
    "Party",
    "normalize_party",
    "same_party",
    # Legislation
    "BILL_SEQUENCE_DDL",
    "BILL_DDL",
    "SPONSORSHIP_DDL",
    "MOTION_DDL",
    "Bill",
    "Motion",
    "SponsorshipRole",
    # Voting
    "VOTE_DDL",
    "PARTY_LOYALTY_DDL",
    "Ballot",
    "VoteResult",
    "PartyPosition",
    "LoyaltyBucket",
    "Vote",
    "PartyLoyaltyStats",
    # All DDL
    "ALL_DDL",
]
