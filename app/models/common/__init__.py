"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity, utcnow
from app.models.common.cache import API_CACHE_DDL

__all__ = [
    "BaseEntity",
    "utcnow",
    "API_CACHE_DDL",
]
