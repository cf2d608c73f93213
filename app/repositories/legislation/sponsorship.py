"""Sponsorship repository - (legislator, bill, role) links, written once."""

from app.models import SponsorshipRole, utcnow
from app.repositories.base import BaseRepository
from app.repositories.transaction import RecordScope


class SponsorshipRepository(BaseRepository):
    def exists(self, legislator_id: int, bill_id: int, role: SponsorshipRole) -> bool:
        return bool(
            self.scalar(
                "SELECT COUNT(*) FROM sponsorship WHERE legislator_id = ? AND bill_id = ? AND role = ?",
                [legislator_id, bill_id, role.value],
            )
        )

    def add(self, scope: RecordScope, legislator_id: int, bill_id: int, role: SponsorshipRole) -> bool:
        """Link a legislator to a bill; returns False when the link already existed."""
        if self.exists(legislator_id, bill_id, role):
            return False
        scope.execute(
            """
            INSERT INTO sponsorship (legislator_id, bill_id, role, created_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT DO NOTHING
            """,
            [legislator_id, bill_id, role.value, utcnow()],
        )
        return True

    def bills_for(self, legislator_id: int, role: SponsorshipRole | None = None) -> list[int]:
        query = "SELECT bill_id FROM sponsorship WHERE legislator_id = ?"
        params: list = [legislator_id]
        if role is not None:
            query += " AND role = ?"
            params.append(role.value)
        return [r[0] for r in self.fetchall(query + " ORDER BY bill_id", params)]
