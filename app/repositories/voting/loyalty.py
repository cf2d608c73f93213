"""Party loyalty repository - recomputed rows with an expiry."""

from datetime import timedelta

from app.models import PartyLoyaltyStats, utcnow
from app.repositories.base import BaseRepository


class LoyaltyRepository(BaseRepository):
    def save(self, stats: PartyLoyaltyStats, ttl: timedelta) -> None:
        """Overwrite the legislator's row with freshly computed stats."""
        now = utcnow()
        self.execute(
            """
            INSERT OR REPLACE INTO party_loyalty (
                legislator_id, party, with_party_votes, against_party_votes, free_votes,
                abstained_paired_votes, excluded_votes, total_votes, loyalty_percentage,
                opposition_percentage, free_vote_percentage, abstained_percentage,
                calculated_at, expires_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                stats.legislator_id,
                stats.party,
                stats.with_party_votes,
                stats.against_party_votes,
                stats.free_votes,
                stats.abstained_paired_votes,
                stats.excluded_votes,
                stats.total_votes,
                stats.loyalty_percentage,
                stats.opposition_percentage,
                stats.free_vote_percentage,
                stats.abstained_percentage,
                now,
                now + ttl,
            ],
        )

    def get_fresh(self, legislator_id: int) -> PartyLoyaltyStats | None:
        """Stored stats unless expired."""
        row = self.fetchone(
            """
            SELECT legislator_id, party, with_party_votes, against_party_votes, free_votes,
                   abstained_paired_votes, excluded_votes
            FROM party_loyalty WHERE legislator_id = ? AND expires_at > ?
            """,
            [legislator_id, utcnow()],
        )
        if not row:
            return None
        return PartyLoyaltyStats(
            legislator_id=row[0],
            party=row[1],
            with_party_votes=row[2],
            against_party_votes=row[3],
            free_votes=row[4],
            abstained_paired_votes=row[5],
            excluded_votes=row[6],
        )

    def clear(self) -> None:
        self.execute("DELETE FROM party_loyalty")
