"""House of Commons votes feed client (XML)."""

import xml.etree.ElementTree as ET

from loguru import logger
from pydantic import ValidationError

from parliament_client.base import BaseClient
from parliament_client.commons.schemas import DivisionSchema
from parliament_client.errors import ApiUnavailableError
from settings import COMMONS_VOTES_URL, USER_AGENT


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_divisions(xml_text: str | bytes) -> list[DivisionSchema]:
    """Parse the <ArrayOfVote> document; malformed entries are skipped."""
    root = ET.fromstring(xml_text)
    divisions = []
    for el in root:
        if _local_name(el.tag) != "Vote":
            continue
        fields = {_local_name(child.tag): (child.text or "").strip() for child in el}
        try:
            divisions.append(DivisionSchema.model_validate(fields))
        except ValidationError as e:
            logger.warning("Skipping malformed division {}: {}", fields.get("DecisionDivisionNumber"), e)
    return divisions


class CommonsClient(BaseClient):
    """Client for the ourcommons.ca divisions feed."""

    base_url = COMMONS_VOTES_URL
    headers = {"Accept": "application/xml", "User-Agent": USER_AGENT}

    async def divisions(self) -> list[DivisionSchema]:
        """GET the votes XML - every recorded division of the current parliament."""
        resp = await self._request(self.base_url)
        if resp is None:
            raise ApiUnavailableError(f"Commons votes feed not found: {self.base_url}")
        return parse_divisions(resp.content)
