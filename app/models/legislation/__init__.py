"""Legislation domain models - bills, sponsorships, motions."""

from app.models.legislation.bill import BILL_DDL, BILL_SEQUENCE_DDL
from app.models.legislation.entities import Bill, Motion, SponsorshipRole
from app.models.legislation.motion import MOTION_DDL
from app.models.legislation.sponsorship import SPONSORSHIP_DDL

__all__ = [
    "BILL_SEQUENCE_DDL",
    "BILL_DDL",
    "SPONSORSHIP_DDL",
    "MOTION_DDL",
    "Bill",
    "Motion",
    "SponsorshipRole",
]
