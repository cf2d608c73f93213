"""Motion repository - Commons divisions without a bill."""

import polars as pl
from loguru import logger

from app.models import Motion
from app.repositories.base import BaseRepository

_COLUMNS = [
    "parliament_number",
    "session_number",
    "division_number",
    "subject",
    "date",
    "result",
    "yeas",
    "nays",
    "paired",
    "document_type",
]


class MotionRepository(BaseRepository):
    def existing_keys(self, parliament_number: int) -> set[tuple[int, int, int]]:
        rows = self.fetchall(
            "SELECT parliament_number, session_number, division_number FROM motion WHERE parliament_number = ?",
            [parliament_number],
        )
        return {(r[0], r[1], r[2]) for r in rows}

    def insert_many(self, motions: list[Motion]) -> int:
        """Bulk insert motions that are not stored yet."""
        if not motions:
            return 0
        existing = set()
        for parliament in {m.parliament_number for m in motions}:
            existing |= self.existing_keys(parliament)
        new = {
            (m.parliament_number, m.session_number, m.division_number): m
            for m in motions
            if (m.parliament_number, m.session_number, m.division_number) not in existing
        }
        if not new:
            return 0

        motions_df = pl.DataFrame(
            [[getattr(m, c) for c in _COLUMNS] for m in new.values()],
            schema={
                "parliament_number": pl.Int32,
                "session_number": pl.Int32,
                "division_number": pl.Int32,
                "subject": pl.Utf8,
                "date": pl.Date,
                "result": pl.Utf8,
                "yeas": pl.Int32,
                "nays": pl.Int32,
                "paired": pl.Int32,
                "document_type": pl.Utf8,
            },
            orient="row",
        )
        self._db.register("motions_df", motions_df)
        self.execute(f"INSERT INTO motion ({', '.join(_COLUMNS)}) SELECT {', '.join(_COLUMNS)} FROM motions_df")
        self._db.unregister("motions_df")
        logger.debug("Motions: inserted {}", len(new))
        return len(new)

    def for_session(
        self,
        parliament_number: int,
        session_number: int,
        division_number: int | None = None,
    ) -> list[Motion]:
        query = f"SELECT {', '.join(_COLUMNS)} FROM motion WHERE parliament_number = ? AND session_number = ?"
        params: list = [parliament_number, session_number]
        if division_number is not None:
            query += " AND division_number = ?"
            params.append(division_number)
        rows = self.fetchall(query + " ORDER BY division_number", params)
        return [Motion(**dict(zip(_COLUMNS, r, strict=True))) for r in rows]

    def count(self) -> int:
        return self.scalar("SELECT COUNT(*) FROM motion")
