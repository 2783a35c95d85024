"""JSON-file implementations of the cache stores."""

from bse_portfolio.repositories.jsonfile.cache_repo import (
    ScripcodeCacheStore,
    TtlCacheStore,
    price_cache_store,
    fundamentals_cache_store,
)

__all__ = [
    "ScripcodeCacheStore",
    "TtlCacheStore",
    "price_cache_store",
    "fundamentals_cache_store",
]
