"""Cache administration endpoints."""

from enum import Enum

from fastapi import APIRouter, Depends

from bse_portfolio.api.deps import get_fundamentals_store, get_price_store
from bse_portfolio.api.schemas import CacheClearedResponse
from bse_portfolio.domain.views import FundamentalsSnapshot, PriceSnapshot
from bse_portfolio.repositories import TtlCacheStore

router = APIRouter(prefix="/api/cache", tags=["cache"])


class CacheName(str, Enum):
    """Clearable caches. The scripcode mapping is permanent and not listed."""

    PRICE = "price"
    FUNDAMENTALS = "fundamentals"


@router.delete("/{name}", response_model=CacheClearedResponse)
def clear_cache(
    name: CacheName,
    price_store: TtlCacheStore[PriceSnapshot] = Depends(get_price_store),
    fundamentals_store: TtlCacheStore[FundamentalsSnapshot] = Depends(get_fundamentals_store),
) -> CacheClearedResponse:
    """Force the next poll to refetch from the vendor."""
    store = price_store if name == CacheName.PRICE else fundamentals_store
    store.clear()
    return CacheClearedResponse(cache=name.value, cleared=True)
