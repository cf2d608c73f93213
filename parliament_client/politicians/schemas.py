"""Politicians API schemas."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from parliament_client.fields import parse_date
from parliament_client.votes.schemas import PartyRefSchema


class MembershipSchema(BaseModel):
    """A politician's seat for one period: party and riding."""

    model_config = ConfigDict(extra="ignore")

    politician_url: str | None = None
    party: PartyRefSchema | None = None
    start_date: dt.date | None = None
    end_date: dt.date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> dt.date | None:
        return parse_date(value)

    @property
    def party_name(self) -> str | None:
        if self.party is None:
            return None
        return self.party.short_name or self.party.name
