"""Core domain entities."""

from dataclasses import dataclass
from datetime import date

from app.models.common import BaseEntity


@dataclass
class Legislator(BaseEntity):
    """Member of Parliament as stored locally."""

    id: int
    name: str
    first_name: str | None = None
    last_name: str | None = None
    party: str | None = None
    district: str | None = None


@dataclass
class ParliamentSession(BaseEntity):
    """One session of a parliament, e.g. 45-1."""

    parliament_number: int
    session_number: int
    start_date: date
    end_date: date | None = None
    is_current: bool = False

    @property
    def code(self) -> str:
        return f"{self.parliament_number}-{self.session_number}"

    @property
    def votes_prefix(self) -> str:
        """URL prefix shared by every vote of this session."""
        return f"/votes/{self.code}/"
