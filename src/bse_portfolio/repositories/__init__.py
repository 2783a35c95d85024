"""Repository layer - file-backed persistence."""

from bse_portfolio.repositories.jsonfile import (
    ScripcodeCacheStore,
    TtlCacheStore,
    price_cache_store,
    fundamentals_cache_store,
)
from bse_portfolio.repositories.portfolio_repo import StaticPortfolioRepository

__all__ = [
    "ScripcodeCacheStore",
    "TtlCacheStore",
    "price_cache_store",
    "fundamentals_cache_store",
    "StaticPortfolioRepository",
]
