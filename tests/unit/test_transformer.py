"""Tests for vote transformation."""

import datetime as dt

from app.models import Ballot, PartyPosition, VoteResult
from app.services.voting.transformer import map_ballot, map_result, party_position, resolve_date
from parliament_client import PartyVoteSchema, VoteDetailSchema


def _tally(*lines):
    return [
        PartyVoteSchema.model_validate({"party": {"name": {"en": name}, "short_name": {"en": short}}, "vote": vote})
        for name, short, vote in lines
    ]


class TestMapping:
    def test_ballots(self):
        assert map_ballot("Yes") == Ballot.YEA
        assert map_ballot("Nay") == Ballot.NAY
        assert map_ballot("Paired") == Ballot.PAIRED
        assert map_ballot("Abstain") == Ballot.ABSTAINED
        assert map_ballot("Didn't vote") == Ballot.NOT_VOTING
        assert map_ballot(None) == Ballot.NOT_VOTING

    def test_results(self):
        assert map_result("Passed") == VoteResult.AGREED_TO
        assert map_result("Failed") == VoteResult.NEGATIVED
        assert map_result("Tie") == VoteResult.TIE
        assert map_result(None) == VoteResult.NEGATIVED


class TestPartyPosition:
    tally = _tally(
        ("Liberal Party of Canada", "Liberal", "Yes"),
        ("Conservative Party of Canada", "Conservative", "No"),
        ("New Democratic Party", "NDP", "Paired"),
    )

    def test_for_and_against(self):
        assert party_position(self.tally, "Lib.") == PartyPosition.FOR
        assert party_position(self.tally, "Conservative") == PartyPosition.AGAINST

    def test_split_party_is_free(self):
        assert party_position(self.tally, "NDP") == PartyPosition.FREE_VOTE

    def test_missing_party_is_free(self):
        assert party_position(self.tally, "Green") == PartyPosition.FREE_VOTE
        assert party_position(self.tally, None) == PartyPosition.FREE_VOTE


class TestDateFallback:
    def test_resolve_date_order(self):
        assert resolve_date(None, dt.date(2025, 6, 1), dt.date(2025, 5, 26)) == dt.date(2025, 6, 1)
        assert resolve_date(None, None) is None

    def test_own_date_wins(self, container):
        detail = VoteDetailSchema.model_validate({"date": "2025-06-18", "result": "Passed"})
        ctx = container.transformer.context("/votes/45-1/10/", detail, bill_introduced=dt.date(2025, 6, 1))
        assert ctx.date == dt.date(2025, 6, 18)
        assert ctx.result == VoteResult.AGREED_TO
        assert (ctx.parliament_number, ctx.session_number) == (45, 1)

    def test_bill_introduced_date(self, container):
        ctx = container.transformer.context("/votes/45-1/10/", None, bill_introduced=dt.date(2025, 6, 1))
        assert ctx.date == dt.date(2025, 6, 1)

    def test_session_start(self, container):
        ctx = container.transformer.context("/votes/45-1/10/", None)
        assert ctx.date == dt.date(2025, 5, 26)

    def test_no_date_drops_vote(self, container):
        ctx = container.transformer.context("/votes/44-1/3/", None)
        assert ctx.date is None
        assert container.transformer.transform("Yes", 1, ctx) is None


class TestTransform:
    def test_builds_vote(self, container):
        detail = VoteDetailSchema.model_validate(
            {
                "date": "2025-06-18",
                "result": "Passed",
                "description": {"en": "3rd reading and adoption"},
                "party_votes": [
                    {"party": {"short_name": {"en": "Conservative"}}, "vote": "No"},
                    {"party": {"short_name": {"en": "Liberal"}}, "vote": "Yes"},
                ],
            }
        )
        ctx = container.transformer.context("/votes/45-1/10/", detail, bill_number="C-5", sponsor_party="Liberal")
        vote = container.transformer.transform("Yes", 1, ctx)

        assert vote.ballot == Ballot.YEA
        assert vote.party_position == PartyPosition.AGAINST
        assert vote.motion_title == "3rd reading and adoption"
        assert vote.sponsor_party == "Liberal"

    def test_sponsor_party_is_canonical(self, container):
        from app.services.reconciliation import PoliticianRef

        assert container.transformer.sponsor_party(PoliticianRef(url="/politicians/marie-claude-bibeau/")) == "Liberal"
        assert container.transformer.sponsor_party(PoliticianRef(url="/politicians/nobody-here/")) is None
