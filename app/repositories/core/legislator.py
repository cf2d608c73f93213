"""Legislator repository - lookups used by reconciliation and party checks."""

from app.models import Legislator
from app.repositories.base import BaseRepository

_COLUMNS = "id, name, first_name, last_name, party, district"


def _to_legislator(row) -> Legislator:
    return Legislator(
        id=row[0],
        name=row[1],
        first_name=row[2],
        last_name=row[3],
        party=row[4],
        district=row[5],
    )


class LegislatorRepository(BaseRepository):
    """Read access to legislators. Rows are owned by profile refresh jobs."""

    def get(self, legislator_id: int) -> Legislator | None:
        """Legislator by id (memoized for the repository's lifetime)."""

        def fetch():
            row = self.fetchone(f"SELECT {_COLUMNS} FROM legislator WHERE id = ?", [legislator_id])
            return _to_legislator(row) if row else None

        return self._cached(f"legislator_{legislator_id}", fetch)

    def all(self) -> list[Legislator]:
        rows = self.fetchall(f"SELECT {_COLUMNS} FROM legislator ORDER BY last_name, first_name, id")
        return [_to_legislator(r) for r in rows]

    def party_of(self, legislator_id: int) -> str | None:
        legislator = self.get(legislator_id)
        return legislator.party if legislator else None

    def find_by_name(self, name: str) -> Legislator | None:
        """Exact or case-insensitive name lookup (CLI filter)."""
        row = self.fetchone(
            f"SELECT {_COLUMNS} FROM legislator WHERE lower(name) = lower(?) ORDER BY name = ? DESC, id LIMIT 1",
            [name, name],
        )
        return _to_legislator(row) if row else None

    # Matchers used by the reconciler, most specific first

    def id_by_exact_name(self, name: str) -> int | None:
        return self.scalar("SELECT id FROM legislator WHERE name = ? ORDER BY id LIMIT 1", [name])

    def id_by_name_ci(self, name: str) -> int | None:
        return self.scalar(
            "SELECT id FROM legislator WHERE lower(name) = lower(?) ORDER BY id LIMIT 1",
            [name],
        )

    def id_by_first_last(self, first_name: str, last_name: str) -> int | None:
        return self.scalar(
            "SELECT id FROM legislator WHERE first_name = ? AND last_name = ? ORDER BY id LIMIT 1",
            [first_name, last_name],
        )

    def id_by_first_last_like(self, first_name: str, last_name: str) -> int | None:
        """Hyphen-insensitive containment on both name parts."""
        return self.scalar(
            """
            SELECT id FROM legislator
            WHERE replace(lower(first_name), '-', ' ') LIKE '%' || replace(lower(?), '-', ' ') || '%'
              AND replace(lower(last_name), '-', ' ') LIKE '%' || replace(lower(?), '-', ' ') || '%'
            ORDER BY id
            LIMIT 1
            """,
            [first_name, last_name],
        )

    def id_by_name_like(self, fragment: str) -> int | None:
        return self.scalar(
            "SELECT id FROM legislator WHERE lower(name) LIKE '%' || lower(?) || '%' ORDER BY id LIMIT 1",
            [fragment],
        )
