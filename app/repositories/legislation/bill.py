"""Bill repository - lookups by natural keys and idempotent upsert."""

import datetime as dt

from app.models import Bill, utcnow
from app.repositories.base import BaseRepository
from app.repositories.transaction import RecordScope

_COLUMNS = """
    id, bill_number, session, parliament_number, session_number, legisinfo_id, title,
    introduced_date, law, private_member_bill, status_code, sponsor_politician_url,
    sponsor_membership_url
"""


def _to_bill(row) -> Bill:
    return Bill(
        id=row[0],
        bill_number=row[1],
        session=row[2],
        parliament_number=row[3],
        session_number=row[4],
        legisinfo_id=row[5],
        title=row[6],
        introduced_date=row[7],
        law=row[8],
        private_member_bill=row[9],
        status_code=row[10],
        sponsor_politician_url=row[11],
        sponsor_membership_url=row[12],
    )


class BillRepository(BaseRepository):
    """Bills are created on first sighting and enriched in place, never deleted."""

    def get(self, bill_id: int) -> Bill | None:
        row = self.fetchone(f"SELECT {_COLUMNS} FROM bill WHERE id = ?", [bill_id])
        return _to_bill(row) if row else None

    def id_by_legisinfo(self, legisinfo_id: int) -> int | None:
        return self.scalar("SELECT id FROM bill WHERE legisinfo_id = ? ORDER BY id LIMIT 1", [legisinfo_id])

    def id_by_number_session(self, bill_number: str, session: str) -> int | None:
        return self.scalar(
            "SELECT id FROM bill WHERE upper(bill_number) = upper(?) AND session = ? ORDER BY id LIMIT 1",
            [bill_number, session],
        )

    def id_by_number(self, bill_number: str) -> int | None:
        """Most recently introduced bill with this number, in any session."""
        return self.scalar(
            """
            SELECT id FROM bill WHERE upper(bill_number) = upper(?)
            ORDER BY introduced_date DESC NULLS LAST, id DESC
            LIMIT 1
            """,
            [bill_number],
        )

    def for_session(self, session: str, bill_number: str | None = None) -> list[Bill]:
        """Bills of a session, optionally a single one."""
        query = f"SELECT {_COLUMNS} FROM bill WHERE session = ?"
        params: list = [session]
        if bill_number:
            query += " AND upper(bill_number) = upper(?)"
            params.append(bill_number)
        rows = self.fetchall(query + " ORDER BY introduced_date NULLS LAST, id", params)
        return [_to_bill(r) for r in rows]

    def latest_introduced_date(self, session: str) -> dt.date | None:
        return self.scalar("SELECT MAX(introduced_date) FROM bill WHERE session = ?", [session])

    def count(self) -> int:
        return self.scalar("SELECT COUNT(*) FROM bill")

    def upsert(self, scope: RecordScope, bill: Bill) -> tuple[int, bool]:
        """Insert or enrich a bill, matched by legisinfo id then (number, session).

        Returns (bill_id, created). Known values are never overwritten with
        nulls.
        """
        existing_id = None
        if bill.legisinfo_id is not None:
            existing_id = self.id_by_legisinfo(bill.legisinfo_id)
        if existing_id is None and bill.session:
            existing_id = self.id_by_number_session(bill.bill_number, bill.session)

        now = utcnow()
        if existing_id is not None:
            scope.execute(
                """
                UPDATE bill SET
                    legisinfo_id = COALESCE(?, legisinfo_id),
                    title = COALESCE(?, title),
                    introduced_date = COALESCE(?, introduced_date),
                    law = COALESCE(?, law),
                    private_member_bill = COALESCE(?, private_member_bill),
                    status_code = COALESCE(?, status_code),
                    sponsor_politician_url = COALESCE(?, sponsor_politician_url),
                    sponsor_membership_url = COALESCE(?, sponsor_membership_url),
                    updated_at = ?
                WHERE id = ?
                """,
                [
                    bill.legisinfo_id,
                    bill.title,
                    bill.introduced_date,
                    bill.law,
                    bill.private_member_bill,
                    bill.status_code,
                    bill.sponsor_politician_url,
                    bill.sponsor_membership_url,
                    now,
                    existing_id,
                ],
            )
            return existing_id, False

        bill_id = scope.fetchone("SELECT nextval('bill_id_seq')")[0]
        scope.execute(
            """
            INSERT INTO bill (
                id, bill_number, session, parliament_number, session_number, legisinfo_id, title,
                introduced_date, law, private_member_bill, status_code, sponsor_politician_url,
                sponsor_membership_url, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                bill_id,
                bill.bill_number,
                bill.session,
                bill.parliament_number,
                bill.session_number,
                bill.legisinfo_id,
                bill.title,
                bill.introduced_date,
                bill.law,
                bill.private_member_bill,
                bill.status_code,
                bill.sponsor_politician_url,
                bill.sponsor_membership_url,
                now,
                now,
            ],
        )
        return bill_id, True
