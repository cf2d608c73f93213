from app.repositories.core.legislator import LegislatorRepository
from app.repositories.core.session import SessionRepository

__all__ = ["LegislatorRepository", "SessionRepository"]
