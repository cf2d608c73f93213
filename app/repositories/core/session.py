"""Parliamentary session repository - the current-session watermark."""

import datetime as dt

from loguru import logger

from app.models import ParliamentSession
from app.repositories.base import BaseRepository

_COLUMNS = "parliament_number, session_number, start_date, end_date, is_current"


def _to_session(row) -> ParliamentSession:
    return ParliamentSession(
        parliament_number=row[0],
        session_number=row[1],
        start_date=row[2],
        end_date=row[3],
        is_current=row[4],
    )


class SessionRepository(BaseRepository):
    """Sessions, with at most one flagged as current."""

    def current(self) -> ParliamentSession | None:
        row = self.fetchone(
            f"SELECT {_COLUMNS} FROM parliament_session WHERE is_current ORDER BY start_date DESC LIMIT 1"
        )
        return _to_session(row) if row else None

    def get(self, parliament_number: int, session_number: int) -> ParliamentSession | None:
        def fetch():
            row = self.fetchone(
                f"SELECT {_COLUMNS} FROM parliament_session WHERE parliament_number = ? AND session_number = ?",
                [parliament_number, session_number],
            )
            return _to_session(row) if row else None

        return self._cached(f"session_{parliament_number}_{session_number}", fetch)

    def start_date(self, parliament_number: int, session_number: int) -> dt.date | None:
        session = self.get(parliament_number, session_number)
        return session.start_date if session else None

    def set_current(
        self,
        parliament_number: int,
        session_number: int,
        start_date: dt.date,
        end_date: dt.date | None = None,
    ) -> ParliamentSession:
        """Create or update a session and make it the only current one."""
        exists = self.scalar(
            "SELECT COUNT(*) FROM parliament_session WHERE parliament_number = ? AND session_number = ?",
            [parliament_number, session_number],
        )
        if exists:
            self.execute(
                """
                UPDATE parliament_session SET start_date = ?, end_date = ?
                WHERE parliament_number = ? AND session_number = ?
                """,
                [start_date, end_date, parliament_number, session_number],
            )
        else:
            self.execute(
                """
                INSERT INTO parliament_session (parliament_number, session_number, start_date, end_date, is_current)
                VALUES (?, ?, ?, ?, FALSE)
                """,
                [parliament_number, session_number, start_date, end_date],
            )
        # One statement flips every row, so there is never a second current session
        self.execute(
            "UPDATE parliament_session SET is_current = (parliament_number = ? AND session_number = ?)",
            [parliament_number, session_number],
        )
        self.clear_cache()
        logger.info("Current session: {}-{} from {}", parliament_number, session_number, start_date)
        return self.current()

    def count_current(self) -> int:
        return self.scalar("SELECT COUNT(*) FROM parliament_session WHERE is_current")
