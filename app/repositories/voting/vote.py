"""Vote repository - idempotent writes and watermark queries."""

import datetime as dt

from loguru import logger

from app.models import Ballot, PartyPosition, Vote, VoteResult, utcnow
from app.repositories.base import BaseRepository
from app.repositories.transaction import RecordScope

_COLUMNS = """
    vote_id, legislator_id, date, ballot, result, bill_id, bill_number, motion_title,
    party_position, sponsor_party, parliament_number, session_number
"""


def _to_vote(row) -> Vote:
    return Vote(
        vote_id=row[0],
        legislator_id=row[1],
        date=row[2],
        ballot=Ballot(row[3]),
        result=VoteResult(row[4]),
        bill_id=row[5],
        bill_number=row[6],
        motion_title=row[7],
        party_position=PartyPosition(row[8]) if row[8] else None,
        sponsor_party=row[9],
        parliament_number=row[10],
        session_number=row[11],
    )


class VoteRepository(BaseRepository):
    """One row per (vote_id, legislator_id)."""

    def exists(self, vote_id: str, legislator_id: int) -> bool:
        return bool(
            self.scalar(
                "SELECT COUNT(*) FROM vote WHERE vote_id = ? AND legislator_id = ?",
                [vote_id, legislator_id],
            )
        )

    def latest_date_for_legislator(self, legislator_id: int) -> dt.date | None:
        return self.scalar("SELECT MAX(date) FROM vote WHERE legislator_id = ?", [legislator_id])

    def latest_date_for_bill(self, bill_id: int) -> dt.date | None:
        return self.scalar("SELECT MAX(date) FROM vote WHERE bill_id = ?", [bill_id])

    def latest_date_for_vote(self, vote_id: str) -> dt.date | None:
        return self.scalar("SELECT MAX(date) FROM vote WHERE vote_id = ?", [vote_id])

    def for_legislator(self, legislator_id: int) -> list[Vote]:
        rows = self.fetchall(
            f"SELECT {_COLUMNS} FROM vote WHERE legislator_id = ? ORDER BY date, vote_id",
            [legislator_id],
        )
        return [_to_vote(r) for r in rows]

    def legislator_ids(self) -> list[int]:
        return [r[0] for r in self.fetchall("SELECT DISTINCT legislator_id FROM vote ORDER BY legislator_id")]

    def count(self) -> int:
        return self.scalar("SELECT COUNT(*) FROM vote")

    def upsert(self, scope: RecordScope, vote: Vote) -> bool:
        """Insert a vote; on conflict only the bill link and timestamp change.

        Returns True when a new row was created.
        """
        created = not self.exists(vote.vote_id, vote.legislator_id)
        now = utcnow()
        scope.execute(
            """
            INSERT INTO vote (
                vote_id, legislator_id, date, ballot, result, bill_id, bill_number, motion_title,
                party_position, sponsor_party, parliament_number, session_number, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (vote_id, legislator_id) DO UPDATE SET
                bill_id = COALESCE(EXCLUDED.bill_id, bill_id),
                updated_at = EXCLUDED.updated_at
            """,
            [
                vote.vote_id,
                vote.legislator_id,
                vote.date,
                Ballot(vote.ballot).value,
                VoteResult(vote.result).value,
                vote.bill_id,
                vote.bill_number,
                vote.motion_title,
                PartyPosition(vote.party_position).value if vote.party_position else None,
                vote.sponsor_party,
                vote.parliament_number,
                vote.session_number,
                now,
                now,
            ],
        )
        return created

    def purge(self) -> int:
        """Delete every vote (purge switch)."""
        count = self.count()
        self.execute("DELETE FROM vote")
        logger.warning("Purged {} votes", count)
        return count
