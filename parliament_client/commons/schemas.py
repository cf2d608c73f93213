"""House of Commons divisions feed schema."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from parliament_client.fields import blank_to_none, parse_date


class DivisionSchema(BaseModel):
    """One <Vote> element of the Commons votes XML."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    parliament_number: int = Field(alias="ParliamentNumber")
    session_number: int = Field(alias="SessionNumber")
    division_number: int = Field(alias="DecisionDivisionNumber")
    date: dt.date | None = Field(default=None, alias="DecisionEventDateTime")
    subject: str | None = Field(default=None, alias="DecisionDivisionSubject")
    result: str | None = Field(default=None, alias="DecisionResultName")
    yeas: int = Field(default=0, alias="DecisionDivisionNumberOfYeas")
    nays: int = Field(default=0, alias="DecisionDivisionNumberOfNays")
    paired: int = Field(default=0, alias="DecisionDivisionNumberOfPaired")
    document_type: str | None = Field(default=None, alias="DecisionDivisionDocumentTypeName")
    bill_number: str | None = Field(default=None, alias="BillNumberCode")

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> dt.date | None:
        return parse_date(value)

    @field_validator("subject", "result", "document_type", "bill_number", mode="before")
    @classmethod
    def _blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("yeas", "nays", "paired", mode="before")
    @classmethod
    def _count(cls, value: Any) -> Any:
        return blank_to_none(value) or 0
