"""Legislation domain entities."""

from dataclasses import dataclass
import datetime as dt
from enum import StrEnum

from app.models.common import BaseEntity


class SponsorshipRole(StrEnum):
    SPONSOR = "Sponsor"
    CO_SPONSOR = "Co-sponsor"


@dataclass
class Bill(BaseEntity):
    """Bill as stored locally.

    ``session`` is the API session code ("45-1"); parliament and session
    numbers are kept split as well for range queries.
    """

    bill_number: str
    session: str | None = None
    parliament_number: int | None = None
    session_number: int | None = None
    legisinfo_id: int | None = None
    title: str | None = None
    introduced_date: dt.date | None = None
    law: bool | None = None
    private_member_bill: bool | None = None
    status_code: str | None = None
    sponsor_politician_url: str | None = None
    sponsor_membership_url: str | None = None
    id: int | None = None


@dataclass
class Motion(BaseEntity):
    """House of Commons division that is not attached to a bill."""

    parliament_number: int
    session_number: int
    division_number: int
    subject: str | None = None
    date: dt.date | None = None
    result: str | None = None
    yeas: int = 0
    nays: int = 0
    paired: int = 0
    document_type: str | None = None

    @property
    def vote_id(self) -> str:
        return f"/votes/{self.parliament_number}-{self.session_number}/{self.division_number}/"
