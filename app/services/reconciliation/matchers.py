"""Ordered matcher chains for legislators and bills.

Each matcher takes a repository and a reference and returns a local id or
None. Chains are plain lists so each strategy can be tested on its own and
the order is visible in one place.
"""

from collections.abc import Callable

from app.repositories import BillRepository, LegislatorRepository
from app.services.reconciliation.refs import BillRef, PoliticianRef

LegislatorMatcher = Callable[[LegislatorRepository, PoliticianRef], int | None]
BillMatcher = Callable[[BillRepository, BillRef], int | None]


def match_exact_name(repo: LegislatorRepository, ref: PoliticianRef) -> int | None:
    return repo.id_by_exact_name(ref.full_name) if ref.full_name else None


def match_name_ci(repo: LegislatorRepository, ref: PoliticianRef) -> int | None:
    return repo.id_by_name_ci(ref.full_name) if ref.full_name else None


def match_derived_first_last(repo: LegislatorRepository, ref: PoliticianRef) -> int | None:
    derived = ref.derived
    if not derived or not derived.first_name:
        return None
    return repo.id_by_first_last(derived.first_name, derived.last_name)


def match_hyphen_like(repo: LegislatorRepository, ref: PoliticianRef) -> int | None:
    derived = ref.derived
    if not derived or not derived.first_name:
        return None
    return repo.id_by_first_last_like(derived.first_name, derived.last_name)


def match_name_substring(repo: LegislatorRepository, ref: PoliticianRef) -> int | None:
    return repo.id_by_name_like(ref.full_name) if ref.full_name else None


LEGISLATOR_MATCHERS: list[tuple[str, LegislatorMatcher]] = [
    ("exact_name", match_exact_name),
    ("name_ci", match_name_ci),
    ("derived_first_last", match_derived_first_last),
    ("hyphen_like", match_hyphen_like),
    ("name_substring", match_name_substring),
]


def match_legisinfo_id(repo: BillRepository, ref: BillRef) -> int | None:
    return repo.id_by_legisinfo(ref.legisinfo_id) if ref.legisinfo_id is not None else None


def match_number_session(repo: BillRepository, ref: BillRef) -> int | None:
    if not ref.bill_number or not ref.session:
        return None
    return repo.id_by_number_session(ref.bill_number, ref.session)


def match_number(repo: BillRepository, ref: BillRef) -> int | None:
    # Can pick another session's bill when numbers are reused
    return repo.id_by_number(ref.bill_number) if ref.bill_number else None


BILL_MATCHERS: list[tuple[str, BillMatcher]] = [
    ("legisinfo_id", match_legisinfo_id),
    ("number_session", match_number_session),
    ("number", match_number),
]
