"""Tests for persistence: batch transactions, vote upserts, caches."""

import datetime as dt
from datetime import timedelta

import pytest

from app.models import Motion, SponsorshipRole
from app.repositories import BatchTransaction, CacheRepository, RecordScope
from etl.validation import validate
from tests.conftest import make_vote


class TestBatchTransaction:
    def test_failed_record_is_isolated(self, container):
        def bad(scope):
            container.votes.upsert(scope, make_vote(vote_id="/votes/45-1/2/"))
            raise ValueError("boom")

        with BatchTransaction(container.conn, "test") as tx:
            tx.run("one", lambda scope: container.votes.upsert(scope, make_vote(vote_id="/votes/45-1/1/")))
            assert tx.run("two", bad) is None
            tx.run("three", lambda scope: container.votes.upsert(scope, make_vote(vote_id="/votes/45-1/3/")))

        assert (tx.succeeded, tx.failed) == (2, 1)
        assert container.votes.exists("/votes/45-1/1/", 1)
        assert not container.votes.exists("/votes/45-1/2/", 1)
        assert container.votes.exists("/votes/45-1/3/", 1)

    def test_constraint_error_is_isolated(self, container):
        with BatchTransaction(container.conn, "test") as tx:
            tx.run("ok", lambda scope: container.votes.upsert(scope, make_vote()))
            tx.run("null key", lambda scope: container.votes.upsert(scope, make_vote(legislator_id=None)))

        assert tx.failed == 1
        assert container.votes.count() == 1

    def test_batch_error_rolls_back_everything(self, container):
        with pytest.raises(RuntimeError):
            with BatchTransaction(container.conn, "test") as tx:
                tx.run("one", lambda scope: container.votes.upsert(scope, make_vote()))
                raise RuntimeError("connection lost")

        assert container.votes.count() == 0


class TestVotes:
    def test_upsert_is_idempotent(self, container):
        scope = RecordScope(container.conn)
        assert container.votes.upsert(scope, make_vote()) is True
        assert container.votes.upsert(scope, make_vote()) is False
        assert container.votes.count() == 1

    def test_conflict_only_fills_bill_link(self, container):
        scope = RecordScope(container.conn)
        container.votes.upsert(scope, make_vote())
        container.votes.upsert(scope, make_vote(bill_id=7, motion_title="changed"))
        container.votes.upsert(scope, make_vote(bill_id=None))

        (stored,) = container.votes.for_legislator(1)
        assert stored.bill_id == 7
        assert stored.motion_title is None

    def test_watermark_queries(self, container):
        scope = RecordScope(container.conn)
        container.votes.upsert(scope, make_vote(vote_id="/votes/45-1/1/", date=dt.date(2025, 6, 2), bill_id=3))
        container.votes.upsert(scope, make_vote(vote_id="/votes/45-1/2/", date=dt.date(2025, 6, 9)))

        assert container.votes.latest_date_for_legislator(1) == dt.date(2025, 6, 9)
        assert container.votes.latest_date_for_bill(3) == dt.date(2025, 6, 2)
        assert container.votes.latest_date_for_vote("/votes/45-1/9/") is None

    def test_purge(self, container):
        container.votes.upsert(RecordScope(container.conn), make_vote())
        assert container.votes.purge() == 1
        assert container.votes.count() == 0


class TestCache:
    def test_put_and_get(self, conn):
        cache = CacheRepository(conn)
        cache.put("/votes/45-1/10/", {"date": "2025-06-18"}, timedelta(hours=1))
        assert cache.get("/votes/45-1/10/") == {"date": "2025-06-18"}
        assert cache.count() == 1

    def test_expired_is_miss(self, conn):
        cache = CacheRepository(conn)
        cache.put("/bills/45-1/C-5/", {"number": "C-5"}, timedelta(seconds=-1))
        assert cache.get("/bills/45-1/C-5/") is None

    def test_clear(self, conn):
        cache = CacheRepository(conn)
        cache.put("a", [1], timedelta(hours=1))
        assert cache.clear() == 1
        assert cache.get("a") is None


class TestMotionsAndSponsors:
    def test_insert_many_skips_known(self, container):
        motion = Motion(parliament_number=45, session_number=1, division_number=12, subject="Opposition motion")
        assert container.motions.insert_many([motion, motion]) == 1
        assert container.motions.insert_many([motion]) == 0
        assert container.motions.for_session(45, 1)[0].vote_id == "/votes/45-1/12/"

    def test_sponsorship_written_once(self, container):
        scope = RecordScope(container.conn)
        assert container.sponsorships.add(scope, 2, 1, SponsorshipRole.SPONSOR)
        assert not container.sponsorships.add(scope, 2, 1, SponsorshipRole.SPONSOR)
        assert container.sponsorships.bills_for(2) == [1]


class TestValidation:
    def test_empty_database(self, conn):
        result = validate(conn)
        assert not result["valid"]
        assert result["stats"]["vote"] == 0

    def test_seeded(self, container):
        assert validate(container.conn)["valid"]
