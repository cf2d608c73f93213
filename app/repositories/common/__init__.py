from app.repositories.common.cache import CacheRepository, ResponseCache

__all__ = ["CacheRepository", "ResponseCache"]
