"""Entity reconciliation - politician and bill references to local rows."""

from app.services.reconciliation.matchers import BILL_MATCHERS, LEGISLATOR_MATCHERS
from app.services.reconciliation.reconciler import EntityReconciler
from app.services.reconciliation.refs import (
    BillRef,
    DerivedName,
    PoliticianRef,
    derive_name,
    name_to_slug,
    parse_bill_url,
    parse_vote_url,
    politician_slug,
)

__all__ = [
    "EntityReconciler",
    "LEGISLATOR_MATCHERS",
    "BILL_MATCHERS",
    "BillRef",
    "DerivedName",
    "PoliticianRef",
    "derive_name",
    "name_to_slug",
    "parse_bill_url",
    "parse_vote_url",
    "politician_slug",
]
