from app.repositories.legislation.bill import BillRepository
from app.repositories.legislation.motion import MotionRepository
from app.repositories.legislation.sponsorship import SponsorshipRepository

__all__ = ["BillRepository", "MotionRepository", "SponsorshipRepository"]
