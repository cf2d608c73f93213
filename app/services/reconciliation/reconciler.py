"""Entity reconciler - external references to local ids."""

from collections import Counter

from loguru import logger

from app.repositories import BillRepository, LegislatorRepository
from app.services.reconciliation.matchers import (
    BILL_MATCHERS,
    LEGISLATOR_MATCHERS,
    BillMatcher,
    LegislatorMatcher,
)
from app.services.reconciliation.refs import BillRef, PoliticianRef


class EntityReconciler:
    """Resolves politician and bill references through ordered matcher chains.

    Hits are memoized for the reconciler's lifetime (one sync run); misses
    are not, because bills created later in the run must become visible.
    """

    def __init__(
        self,
        legislator_repo: LegislatorRepository,
        bill_repo: BillRepository,
        legislator_matchers: list[tuple[str, LegislatorMatcher]] | None = None,
        bill_matchers: list[tuple[str, BillMatcher]] | None = None,
    ):
        self._legislators = legislator_repo
        self._bills = bill_repo
        self._legislator_matchers = legislator_matchers or LEGISLATOR_MATCHERS
        self._bill_matchers = bill_matchers or BILL_MATCHERS
        self._legislator_hits: dict[str, int] = {}
        self._bill_hits: dict[BillRef, int] = {}
        self.strategy_hits: Counter[str] = Counter()

    def resolve_legislator(self, ref: PoliticianRef | None) -> int | None:
        """Local legislator id, or None when no strategy matches."""
        if ref is None or not ref.key:
            return None
        if ref.key in self._legislator_hits:
            return self._legislator_hits[ref.key]

        for name, matcher in self._legislator_matchers:
            legislator_id = matcher(self._legislators, ref)
            if legislator_id is not None:
                logger.debug("Legislator {} -> {} ({})", ref.key, legislator_id, name)
                self.strategy_hits[name] += 1
                self._legislator_hits[ref.key] = legislator_id
                return legislator_id

        logger.debug("Legislator unresolved: {}", ref.key)
        return None

    def resolve_bill(
        self,
        legisinfo_id: int | None = None,
        bill_number: str | None = None,
        session: str | None = None,
    ) -> int | None:
        """Local bill id by legisinfo id, then (number, session), then number alone."""
        ref = BillRef(legisinfo_id=legisinfo_id, bill_number=bill_number, session=session)
        if ref in self._bill_hits:
            return self._bill_hits[ref]

        for name, matcher in self._bill_matchers:
            bill_id = matcher(self._bills, ref)
            if bill_id is not None:
                if name == "number":
                    logger.debug("Bill {} matched by number only (session {})", bill_number, session)
                self.strategy_hits[f"bill_{name}"] += 1
                self._bill_hits[ref] = bill_id
                return bill_id
        return None

    def resolve_bill_ref(self, ref: BillRef | None) -> int | None:
        if ref is None:
            return None
        return self.resolve_bill(ref.legisinfo_id, ref.bill_number, ref.session)
