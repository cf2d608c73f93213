"""Tests for reference parsing and name heuristics."""

from app.services.reconciliation import (
    BillRef,
    PoliticianRef,
    derive_name,
    name_to_slug,
    parse_bill_url,
    parse_vote_url,
    politician_slug,
)


class TestSlugs:
    def test_politician_slug(self):
        assert politician_slug("/politicians/ziad-aboultaif/") == "ziad-aboultaif"
        assert politician_slug("https://openparliament.ca/politicians/anju-dhillon/") == "anju-dhillon"
        assert politician_slug(None) is None

    def test_derive_name(self):
        name = derive_name("marie-claude-bibeau")
        assert name.first_name == "Marie Claude"
        assert name.last_name == "Bibeau"

    def test_name_to_slug_folds_accents(self):
        assert name_to_slug("Élisabeth Brière") == "elisabeth-briere"
        assert name_to_slug("Marie-Claude  Bibeau") == "marie-claude-bibeau"


class TestPoliticianRef:
    def test_name_wins_for_full_name(self):
        ref = PoliticianRef(url="/politicians/ziad-aboultaif/", name="Ziad Aboultaif")
        assert ref.full_name == "Ziad Aboultaif"
        assert ref.key == "/politicians/ziad-aboultaif/"

    def test_derived_from_name_without_url(self):
        ref = PoliticianRef(name="Anju Dhillon")
        assert ref.derived.first_name == "Anju"
        assert ref.derived.last_name == "Dhillon"


class TestUrls:
    def test_parse_bill_url(self):
        assert parse_bill_url("/bills/45-1/c-5/") == ("45-1", "C-5")
        assert parse_bill_url("/votes/45-1/5/") is None

    def test_bill_ref_from_url(self):
        ref = BillRef.from_url("/bills/45-1/C-5/", legisinfo_id=13)
        assert ref == BillRef(legisinfo_id=13, bill_number="C-5", session="45-1")
        assert BillRef.from_url(None) is None

    def test_parse_vote_url(self):
        assert parse_vote_url("/votes/45-1/59/") == (45, 1, 59)
        assert parse_vote_url("/votes/ballots/") is None
