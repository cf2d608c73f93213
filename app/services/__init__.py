"""Services package - service class exports."""

from app.services.reconciliation import EntityReconciler
from app.services.voting import PartyLoyaltyCalculator, VoteTransformer

__all__ = [
    "EntityReconciler",
    "PartyLoyaltyCalculator",
    "VoteTransformer",
]
