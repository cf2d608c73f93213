from app.repositories.voting.loyalty import LoyaltyRepository
from app.repositories.voting.vote import VoteRepository

__all__ = ["LoyaltyRepository", "VoteRepository"]
