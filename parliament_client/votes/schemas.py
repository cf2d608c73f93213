"""Votes API schemas."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from parliament_client.fields import localized, parse_date


class BallotSchema(BaseModel):
    """One politician's ballot on one vote."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    vote_url: str
    politician_url: str | None = None
    politician_name: str | None = Field(default=None, alias="politician")
    politician_membership_url: str | None = None
    ballot: str | None = None

    @field_validator("politician_name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str | None:
        # Some listings embed the politician object instead of a name
        if isinstance(value, dict):
            return localized(value.get("name"))
        return localized(value)


class PartyRefSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    short_name: str | None = None

    @field_validator("name", "short_name", mode="before")
    @classmethod
    def _en(cls, value: Any) -> str | None:
        return localized(value)


class PartyVoteSchema(BaseModel):
    """Per-party tally line embedded in a vote detail."""

    model_config = ConfigDict(extra="ignore")

    party: PartyRefSchema | None = None
    vote: str | None = None
    disagreement: float | None = None


class VoteDetailSchema(BaseModel):
    """Vote (division) detail."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str | None = None
    session: str | None = None
    number: int | None = None
    date: dt.date | None = None
    description: str | None = None
    result: str | None = None
    bill_url: str | None = None
    yea_total: int = 0
    nay_total: int = 0
    paired_total: int = 0
    party_votes: list[PartyVoteSchema] = []
    related: dict[str, Any] = {}

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> dt.date | None:
        return parse_date(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str | None:
        return localized(value)

    @field_validator("party_votes", mode="before")
    @classmethod
    def _party_votes(cls, value: Any) -> list:
        return value or []

    @field_validator("related", mode="before")
    @classmethod
    def _related(cls, value: Any) -> dict:
        return value or {}

    @property
    def ballots_url(self) -> str | None:
        return self.related.get("ballots_url")
