"""Bills API schemas."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from parliament_client.fields import blank_to_none, localized, parse_date


class BillSchema(BaseModel):
    """Bill from the listing or the detail endpoint.

    The listing only carries identity fields; detail adds sponsor, flags,
    status and vote links.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    number: str
    session: str | None = None
    url: str | None = None
    legisinfo_id: int | None = None
    introduced: dt.date | None = None
    title: str | None = Field(default=None, alias="name")
    law: bool | None = None
    private_member_bill: bool | None = None
    status_code: str | None = None
    sponsor_politician_url: str | None = None
    sponsor_politician_membership_url: str | None = None
    vote_urls: list[str] = []

    @field_validator("introduced", mode="before")
    @classmethod
    def _date(cls, value: Any) -> dt.date | None:
        return parse_date(value)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, value: Any) -> str | None:
        return localized(value)

    @field_validator("legisinfo_id", "status_code", "sponsor_politician_url", mode="before")
    @classmethod
    def _blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("vote_urls", mode="before")
    @classmethod
    def _vote_urls(cls, value: Any) -> list:
        return value or []

    @property
    def detail_url(self) -> str:
        return self.url or f"/bills/{self.session}/{self.number}/"

    @property
    def is_detailed(self) -> bool:
        """Whether the payload already has the fields only detail provides."""
        return self.status_code is not None and self.sponsor_politician_url is not None
