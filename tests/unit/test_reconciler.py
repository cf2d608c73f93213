"""Tests for entity reconciliation."""

import datetime as dt

from app.models import Bill
from app.repositories import RecordScope
from app.services.reconciliation import PoliticianRef


class TestLegislators:
    def test_exact_name(self, container):
        assert container.reconciler.resolve_legislator(PoliticianRef(name="Ziad Aboultaif")) == 1
        assert container.reconciler.strategy_hits["exact_name"] == 1

    def test_case_insensitive(self, container):
        assert container.reconciler.resolve_legislator(PoliticianRef(name="anju dhillon")) == 2
        assert container.reconciler.strategy_hits["name_ci"] == 1

    def test_slug(self, container):
        assert container.reconciler.resolve_legislator(PoliticianRef(url="/politicians/alexandre-boulerice/")) == 3

    def test_hyphenated_first_name(self, container):
        assert container.reconciler.resolve_legislator(PoliticianRef(url="/politicians/marie-claude-bibeau/")) == 4
        assert container.reconciler.strategy_hits["hyphen_like"] == 1

    def test_substring(self, container):
        assert container.reconciler.resolve_legislator(PoliticianRef(name="Boulerice")) == 3
        assert container.reconciler.strategy_hits["name_substring"] == 1

    def test_hits_are_memoized(self, container):
        ref = PoliticianRef(url="/politicians/ziad-aboultaif/")
        container.reconciler.resolve_legislator(ref)
        container.reconciler.resolve_legislator(ref)
        assert sum(container.reconciler.strategy_hits.values()) == 1

    def test_misses_are_not_memoized(self, container):
        ref = PoliticianRef(url="/politicians/jenny-kwan/")
        assert container.reconciler.resolve_legislator(ref) is None

        container.conn.execute(
            "INSERT INTO legislator (id, name, first_name, last_name, party) VALUES (5, 'Jenny Kwan', 'Jenny', 'Kwan', 'NDP')"
        )
        assert container.reconciler.resolve_legislator(ref) == 5

    def test_empty_ref(self, container):
        assert container.reconciler.resolve_legislator(None) is None
        assert container.reconciler.resolve_legislator(PoliticianRef()) is None


class TestBills:
    def _bill(self, container, **kwargs):
        bill_id, _ = container.bills.upsert(RecordScope(container.conn), Bill(**kwargs))
        return bill_id

    def test_precedence(self, container):
        older = self._bill(container, bill_number="C-5", session="44-1", legisinfo_id=100, introduced_date=dt.date(2022, 2, 3))
        current = self._bill(container, bill_number="C-5", session="45-1", introduced_date=dt.date(2025, 6, 6))

        # legisinfo id beats (number, session)
        assert container.reconciler.resolve_bill(100, "C-5", "45-1") == older
        assert container.reconciler.resolve_bill(None, "C-5", "45-1") == current
        # number alone picks the most recently introduced
        assert container.reconciler.resolve_bill(None, "C-5", "43-2") == current
        assert container.reconciler.resolve_bill(None, "C-99", "45-1") is None

    def test_upsert_matches_legisinfo(self, container):
        first = self._bill(container, bill_number="C-5", session="45-1", legisinfo_id=13)
        bill_id, created = container.bills.upsert(
            RecordScope(container.conn),
            Bill(bill_number="C-5", session="45-1", legisinfo_id=13, title="One Canadian Economy Act"),
        )
        assert (bill_id, created) == (first, False)
        assert container.bills.get(first).title == "One Canadian Economy Act"
        assert container.bills.count() == 1
