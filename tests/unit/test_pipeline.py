"""End-to-end sync against a fake openparliament.ca and Commons feed."""

import httpx
import pytest

from app.container import Container
from etl import STAGES, RunReport, run_stages
from etl.validation import validate
from parliament_client import CommonsClient, ParliamentClient, RetryPolicy
from tests.unit.test_client import DIVISIONS_XML

BILLS = {
    "/bills/45-1/C-5/": {
        "number": "C-5",
        "session": "45-1",
        "url": "/bills/45-1/C-5/",
        "legisinfo_id": 13,
        "introduced": "2025-06-06",
        "name": {"en": "One Canadian Economy Act", "fr": "Loi sur l'unité de l'économie canadienne"},
        "status_code": "RoyalAssentGiven",
        "law": True,
        "private_member_bill": False,
        "sponsor_politician_url": "/politicians/anju-dhillon/",
        "sponsor_politician_membership_url": "/politicians/roles/123/",
        "vote_urls": ["/votes/45-1/10/", "/votes/45-1/11/", "/votes/44-1/5/"],
    },
    "/bills/45-1/C-6/": {
        "number": "C-6",
        "session": "45-1",
        "url": "/bills/45-1/C-6/",
        "legisinfo_id": 14,
        "introduced": "2025-09-15",
        "name": {"en": "An Act respecting grocery prices"},
        "status_code": "HouseAt2ndReading",
        "private_member_bill": True,
        "sponsor_politician_url": "/politicians/ziad-aboultaif/",
        "vote_urls": ["/votes/45-1/20/"],
    },
}

TALLY = [
    {"party": {"name": {"en": "Liberal Party of Canada"}, "short_name": {"en": "Liberal"}}, "vote": "Yes"},
    {"party": {"name": {"en": "Conservative Party of Canada"}, "short_name": {"en": "Conservative"}}, "vote": "No"},
    {"party": {"name": {"en": "New Democratic Party"}, "short_name": {"en": "NDP"}}, "vote": "Yes"},
]


def _vote(url, date, bill_url=None):
    return {
        "url": url,
        "date": date,
        "result": "Passed",
        "description": {"en": f"Division {url}"},
        "bill_url": bill_url,
        "party_votes": TALLY,
        "related": {"ballots_url": f"/votes/ballots/?vote={url}"},
    }


VOTES = {
    "/votes/45-1/10/": _vote("/votes/45-1/10/", "2025-06-18", "/bills/45-1/C-5/"),
    "/votes/45-1/11/": _vote("/votes/45-1/11/", "2025-06-19", "/bills/45-1/C-5/"),
    "/votes/45-1/12/": _vote("/votes/45-1/12/", "2025-06-10"),
    "/votes/45-1/15/": _vote("/votes/45-1/15/", "2025-06-15"),
    "/votes/45-1/20/": _vote("/votes/45-1/20/", "2025-09-20", "/bills/45-1/C-6/"),
}


def _ballots_for_vote(vote_url):
    return [
        {"vote_url": vote_url, "politician_url": "/politicians/ziad-aboultaif/", "ballot": "No"},
        {"vote_url": vote_url, "politician_url": "/politicians/anju-dhillon/", "ballot": "Yes"},
        {"vote_url": vote_url, "politician_url": "/politicians/alexandre-boulerice/", "ballot": "Yes"},
        {"vote_url": vote_url, "politician_url": "/politicians/not-a-member/", "ballot": "Yes"},
    ]


POLITICIAN_BALLOTS = {
    "ziad-aboultaif": [
        {"vote_url": "/votes/45-1/20/", "politician_url": "/politicians/ziad-aboultaif/", "ballot": "Yes"},
        {"vote_url": "/votes/45-1/10/", "politician_url": "/politicians/ziad-aboultaif/", "ballot": "No"},
        # Not stored yet, but older than the stored 2025-06-19 round
        {"vote_url": "/votes/45-1/15/", "politician_url": "/politicians/ziad-aboultaif/", "ballot": "Yes"},
        {"vote_url": "/votes/44-1/3/", "politician_url": "/politicians/ziad-aboultaif/", "ballot": "Yes"},
    ],
}


def _listing(objects):
    return httpx.Response(200, json={"objects": objects, "pagination": {"next_url": None}})


def openparliament(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    params = request.url.params
    if path == "/votes/ballots/":
        if "vote" in params:
            return _listing(_ballots_for_vote(params["vote"]))
        return _listing(POLITICIAN_BALLOTS.get(params.get("politician"), []))
    if path == "/bills/":
        listed = BILLS["/bills/45-1/C-5/"]
        return _listing([{k: listed[k] for k in ("number", "session", "url", "legisinfo_id", "introduced", "name")}])
    if path in BILLS:
        return httpx.Response(200, json=BILLS[path])
    if path in VOTES:
        return httpx.Response(200, json=VOTES[path])
    return httpx.Response(404)


def commons_feed(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=DIVISIONS_XML.encode())


async def _run(conn, stages=STAGES, only=None, feed=commons_feed):
    policy = RetryPolicy(base_delay=0, max_delay=0)
    client = ParliamentClient(request_delay=0, policy=policy, transport=httpx.MockTransport(openparliament))
    commons = CommonsClient(request_delay=0, policy=policy, transport=httpx.MockTransport(feed))
    report = RunReport()
    await run_stages(Container(conn), stages, only, report=report, client=client, commons=commons)
    return {s.stage: s for s in report.stages}


def _count(conn, table):
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestNightlyRun:
    @pytest.mark.asyncio
    async def test_first_run(self, seeded):
        stats = await _run(seeded)

        assert stats["bills"].inserted == 1
        assert stats["motions"].inserted == 1
        # C-5 rounds 10 and 11, three members each; one ballot unresolved per round
        assert stats["votes-bills"].inserted == 6
        assert stats["votes-bills"].unresolved == 2
        assert stats["votes-motions"].inserted == 3
        # Round 20 only; 10 is stored, 15 is below the watermark, 44-1 is another session
        assert stats["votes-ballots"].inserted == 1
        assert stats["votes-ballots"].skipped == 3

        assert _count(seeded, "vote") == 10
        assert _count(seeded, "bill") == 2
        assert _count(seeded, "sponsorship") == 2
        assert validate(seeded)["valid"]

    @pytest.mark.asyncio
    async def test_vote_fields(self, seeded):
        await _run(seeded)

        bill_id, ballot, position, sponsor = seeded.execute(
            """
            SELECT bill_id, ballot, party_position, sponsor_party FROM vote
            WHERE vote_id = '/votes/45-1/10/' AND legislator_id = 1
            """
        ).fetchone()
        assert (ballot, position, sponsor) == ("Nay", "Against", "Liberal")
        assert seeded.execute("SELECT bill_number FROM bill WHERE id = ?", [bill_id]).fetchone()[0] == "C-5"

        # Bill first seen through a ballot is created and linked
        linked = seeded.execute(
            """
            SELECT b.bill_number, v.sponsor_party FROM vote v JOIN bill b ON b.id = v.bill_id
            WHERE v.vote_id = '/votes/45-1/20/'
            """
        ).fetchone()
        assert linked == ("C-6", "Conservative")

        motion_title = seeded.execute(
            "SELECT motion_title, bill_id FROM vote WHERE vote_id = '/votes/45-1/12/' LIMIT 1"
        ).fetchone()
        assert motion_title == ("Opposition Motion (Cost of living)", None)

    @pytest.mark.asyncio
    async def test_loyalty(self, seeded):
        await _run(seeded)
        container = Container(seeded)

        # Liberal sponsor: two Yeas with party, motion excluded
        anju = container.loyalty_repo.get_fresh(2)
        assert (anju.with_party_votes, anju.excluded_votes) == (2, 1)
        assert anju.loyalty_percentage == 100.0

        # Nays on a Liberal bill are excluded, Yea on own C-6 counts
        ziad = container.loyalty_repo.get_fresh(1)
        assert (ziad.with_party_votes, ziad.excluded_votes) == (1, 3)

        alexandre = container.loyalty_repo.get_fresh(3)
        assert alexandre.free_votes == 2
        assert alexandre.free_vote_percentage == 100.0

    @pytest.mark.asyncio
    async def test_second_run_adds_nothing(self, seeded):
        await _run(seeded)
        votes, bills = _count(seeded, "vote"), _count(seeded, "bill")

        stats = await _run(seeded)

        assert _count(seeded, "vote") == votes
        assert _count(seeded, "bill") == bills
        assert _count(seeded, "motion") == 1
        for stage in ("bills", "motions", "votes-bills", "votes-motions", "votes-ballots"):
            assert stats[stage].inserted == 0, stage
            assert stats[stage].errors == 0, stage
        for stage in ("votes-bills", "votes-motions", "votes-ballots"):
            assert stats[stage].updated == 0, stage

    @pytest.mark.asyncio
    async def test_ballot_below_watermark_is_skipped(self, seeded):
        await _run(seeded)
        votes = _count(seeded, "vote")

        stats = await _run(seeded, ("votes-ballots",))

        # 10 and 20 are stored, 44-1/3 is another session, 15 predates the latest stored round
        assert stats["votes-ballots"].skipped == 4
        assert stats["votes-ballots"].inserted == 0
        assert stats["votes-ballots"].updated == 0
        assert _count(seeded, "vote") == votes
        assert not Container(seeded).votes.exists("/votes/45-1/15/", 1)

    @pytest.mark.asyncio
    async def test_commons_feed_down_skips_motions(self, seeded):
        stats = await _run(seeded, feed=lambda request: httpx.Response(503))

        assert stats["motions"].errors == 1
        assert stats["motions"].inserted == 0
        assert _count(seeded, "motion") == 0
        # Remaining stages still run
        assert stats["votes-bills"].inserted == 6
        assert stats["votes-motions"].inserted == 0
        assert stats["votes-ballots"].inserted == 1
        assert "loyalty" in stats

    @pytest.mark.asyncio
    async def test_single_bill(self, seeded):
        await _run(seeded, ("bills",))
        stats = await _run(seeded, ("votes-bills",), only="C-5")
        assert stats["votes-bills"].inserted == 6

    @pytest.mark.asyncio
    async def test_api_down_is_fatal(self, seeded):
        from parliament_client import ApiUnavailableError

        policy = RetryPolicy(base_delay=0, max_delay=0)
        client = ParliamentClient(
            request_delay=0,
            policy=policy,
            transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        )
        with pytest.raises(ApiUnavailableError):
            await run_stages(Container(seeded), ("bills",), client=client)
