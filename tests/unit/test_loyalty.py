"""Tests for party loyalty."""

from datetime import timedelta

from app.models import Ballot, LoyaltyBucket
from app.repositories import RecordScope
from app.services.voting import PartyLoyaltyCalculator
from app.services.voting.loyalty import classify, tally
from tests.conftest import make_vote


def _bill_vote(n, ballot, sponsor):
    return make_vote(vote_id=f"/votes/45-1/{n}/", legislator_id=2, ballot=ballot, bill_number="C-5", sponsor_party=sponsor)


class TestClassify:
    def test_own_party_bill(self):
        assert classify(_bill_vote(1, Ballot.YEA, "Liberal"), "Lib.") == LoyaltyBucket.WITH_PARTY
        assert classify(_bill_vote(1, Ballot.NAY, "Liberal"), "Liberal") == LoyaltyBucket.AGAINST_PARTY

    def test_party_spellings_agree(self):
        assert classify(_bill_vote(1, Ballot.YEA, "Liberal Party of Canada"), "PLC") == LoyaltyBucket.WITH_PARTY
        assert classify(_bill_vote(1, Ballot.YEA, "Bloc"), "Bloc Québécois") == LoyaltyBucket.WITH_PARTY
        assert classify(_bill_vote(1, Ballot.NAY, "NDP"), "New Democratic Party") == LoyaltyBucket.AGAINST_PARTY

    def test_other_party_bill(self):
        assert classify(_bill_vote(1, Ballot.YEA, "Conservative"), "Liberal") == LoyaltyBucket.FREE
        assert classify(_bill_vote(1, Ballot.NAY, "Conservative"), "Liberal") == LoyaltyBucket.EXCLUDED

    def test_abstentions_any_sponsor(self):
        for ballot in (Ballot.PAIRED, Ballot.ABSTAINED, Ballot.NOT_VOTING):
            assert classify(_bill_vote(1, ballot, "Conservative"), "Liberal") == LoyaltyBucket.ABSTAINED

    def test_needs_bill_and_sponsor(self):
        assert classify(make_vote(sponsor_party="Liberal"), "Liberal") == LoyaltyBucket.EXCLUDED
        assert classify(_bill_vote(1, Ballot.YEA, None), "Liberal") == LoyaltyBucket.EXCLUDED


class TestTally:
    def test_partition(self):
        votes = [
            _bill_vote(1, Ballot.YEA, "Liberal"),
            _bill_vote(2, Ballot.YEA, "Liberal"),
            _bill_vote(3, Ballot.YEA, "Liberal"),
            _bill_vote(4, Ballot.NAY, "Liberal"),
            _bill_vote(5, Ballot.YEA, "Conservative"),
            _bill_vote(6, Ballot.PAIRED, "Liberal"),
            _bill_vote(7, Ballot.NAY, "Bloc Québécois"),
        ]
        stats = tally(2, "Liberal", votes)

        assert (stats.with_party_votes, stats.against_party_votes, stats.free_votes) == (3, 1, 1)
        assert stats.abstained_paired_votes == 1
        assert stats.excluded_votes == 1
        assert stats.total_votes == 6
        assert stats.loyalty_percentage == 50.0
        assert stats.opposition_percentage == 16.67

    def test_no_votes(self):
        stats = tally(2, "Liberal", [])
        assert stats.total_votes == 0
        assert stats.loyalty_percentage == 0.0


class TestCalculator:
    def test_calculate_and_store(self, container):
        scope = RecordScope(container.conn)
        container.votes.upsert(scope, _bill_vote(1, Ballot.YEA, "Liberal"))
        container.votes.upsert(scope, _bill_vote(2, Ballot.NAY, "Liberal"))

        stats = container.loyalty.calculate(2)
        assert stats.loyalty_percentage == 50.0
        assert container.loyalty_repo.get_fresh(2).with_party_votes == 1

    def test_unknown_legislator(self, container):
        assert container.loyalty.calculate(999) is None

    def test_expired_stats_are_recomputed(self, container):
        calculator = PartyLoyaltyCalculator(
            container.votes, container.legislators, container.loyalty_repo, ttl=timedelta(seconds=-1)
        )
        container.votes.upsert(RecordScope(container.conn), _bill_vote(1, Ballot.YEA, "Liberal"))
        calculator.calculate(2)
        assert container.loyalty_repo.get_fresh(2) is None
        assert calculator.get(2).with_party_votes == 1

    def test_calculate_all(self, container):
        scope = RecordScope(container.conn)
        container.votes.upsert(scope, _bill_vote(1, Ballot.YEA, "Liberal"))
        container.votes.upsert(scope, make_vote(legislator_id=1))
        assert container.loyalty.calculate_all() == 2
