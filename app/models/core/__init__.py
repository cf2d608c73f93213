"""Core domain models - legislators, sessions, parties."""

from app.models.core.entities import Legislator, ParliamentSession
from app.models.core.legislator import LEGISLATOR_DDL, LEGISLATOR_INDEXES
from app.models.core.party import Party, normalize_party, same_party
from app.models.core.session import SESSION_DDL

__all__ = [
    "LEGISLATOR_DDL",
    "LEGISLATOR_INDEXES",
    "SESSION_DDL",
    "Legislator",
    "ParliamentSession",
    "Party",
    "normalize_party",
    "same_party",
]
