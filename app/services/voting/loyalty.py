"""Party-loyalty calculator.

Only votes on bills with a known sponsor party count. For a legislator of
party P voting on a bill sponsored by party S:

    S == P, Yea               -> with party
    S == P, Nay               -> against party
    S != P, Yea               -> free vote
    S != P, Nay               -> excluded
    Paired/Abstained/NotVoting -> abstained (any S)

Percentages use with + against + free + abstained as the denominator.
"""

from collections.abc import Iterable
from datetime import timedelta

from loguru import logger

from app.models import Ballot, LoyaltyBucket, PartyLoyaltyStats, Vote, normalize_party, same_party
from app.repositories import LegislatorRepository, LoyaltyRepository, VoteRepository
from settings import LOYALTY_TTL_HOURS

_ABSTAINED = {Ballot.PAIRED, Ballot.ABSTAINED, Ballot.NOT_VOTING}


def classify(vote: Vote, legislator_party: str | None) -> LoyaltyBucket:
    """Bucket of a single vote for a legislator of the given party."""
    sponsor = normalize_party(vote.sponsor_party)
    if (vote.bill_id is None and not vote.bill_number) or sponsor is None:
        return LoyaltyBucket.EXCLUDED
    if vote.ballot in _ABSTAINED:
        return LoyaltyBucket.ABSTAINED

    if same_party(vote.sponsor_party, legislator_party):
        if vote.ballot == Ballot.YEA:
            return LoyaltyBucket.WITH_PARTY
        return LoyaltyBucket.AGAINST_PARTY

    if vote.ballot == Ballot.YEA:
        return LoyaltyBucket.FREE
    # Voting down another party's bill says nothing about loyalty
    return LoyaltyBucket.EXCLUDED


def tally(legislator_id: int, party: str | None, votes: Iterable[Vote]) -> PartyLoyaltyStats:
    stats = PartyLoyaltyStats(legislator_id=legislator_id, party=party)
    for vote in votes:
        bucket = classify(vote, party)
        if bucket == LoyaltyBucket.WITH_PARTY:
            stats.with_party_votes += 1
        elif bucket == LoyaltyBucket.AGAINST_PARTY:
            stats.against_party_votes += 1
        elif bucket == LoyaltyBucket.FREE:
            stats.free_votes += 1
        elif bucket == LoyaltyBucket.ABSTAINED:
            stats.abstained_paired_votes += 1
        else:
            stats.excluded_votes += 1
    return stats


class PartyLoyaltyCalculator:
    """Recomputes loyalty from stored votes and keeps the result for a while."""

    def __init__(
        self,
        vote_repo: VoteRepository,
        legislator_repo: LegislatorRepository,
        loyalty_repo: LoyaltyRepository,
        ttl: timedelta = timedelta(hours=LOYALTY_TTL_HOURS),
    ):
        self._votes = vote_repo
        self._legislators = legislator_repo
        self._loyalty = loyalty_repo
        self._ttl = ttl

    def calculate(self, legislator_id: int) -> PartyLoyaltyStats | None:
        """Full recompute; overwrites the stored record."""
        legislator = self._legislators.get(legislator_id)
        if legislator is None:
            logger.warning("Loyalty: unknown legislator {}", legislator_id)
            return None

        stats = tally(legislator_id, legislator.party, self._votes.for_legislator(legislator_id))
        self._loyalty.save(stats, self._ttl)
        logger.debug(
            "Loyalty {}: {}% with party over {} votes ({} excluded)",
            legislator.name,
            stats.loyalty_percentage,
            stats.total_votes,
            stats.excluded_votes,
        )
        return stats

    def get(self, legislator_id: int) -> PartyLoyaltyStats | None:
        """Stored stats if still fresh, otherwise recompute."""
        cached = self._loyalty.get_fresh(legislator_id)
        if cached is not None:
            return cached
        return self.calculate(legislator_id)

    def calculate_all(self, legislator_ids: list[int] | None = None) -> int:
        ids = legislator_ids if legislator_ids is not None else self._votes.legislator_ids()
        done = sum(1 for legislator_id in ids if self.calculate(legislator_id) is not None)
        logger.info("Loyalty recomputed for {} legislators", done)
        return done
