"""Repository protocols (interfaces)."""

from bse_portfolio.repositories.protocols.cache_repo import CacheStore

__all__ = ["CacheStore"]
