"""Vendor passthrough endpoints for a single scrip code."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from bse_portfolio.api.deps import get_market_data_service
from bse_portfolio.api.schemas import FundamentalsSnapshotResponse, PriceResponse
from bse_portfolio.core.exceptions import ValidationError, VendorError
from bse_portfolio.services import MarketDataService
from bse_portfolio.services.symbol_resolver import is_scripcode

router = APIRouter(prefix="/api/bse", tags=["bse"])


def _require_scripcode(scripcode: Optional[str]) -> str:
    if not scripcode:
        raise ValidationError("scripcode parameter is required")
    if not is_scripcode(scripcode):
        raise ValidationError("Invalid scripcode format. Must be numeric.")
    return scripcode


@router.get("", response_model=PriceResponse)
def get_price(
    scripcode: Optional[str] = Query(None, description="BSE scrip code, e.g. 544252"),
    market: MarketDataService = Depends(get_market_data_service),
) -> PriceResponse:
    """Fetch the current price for a scrip code (uncached)."""
    code = _require_scripcode(scripcode)
    snapshot = market.fetch_price(code)
    if snapshot is None:
        raise VendorError("Failed to fetch data from BSE API")
    return PriceResponse.model_validate(snapshot)


@router.get("/fundamentals", response_model=FundamentalsSnapshotResponse)
def get_fundamentals(
    scripcode: Optional[str] = Query(None, description="BSE scrip code, e.g. 544252"),
    market: MarketDataService = Depends(get_market_data_service),
) -> FundamentalsSnapshotResponse:
    """Fetch fundamentals for a scrip code (uncached)."""
    code = _require_scripcode(scripcode)
    snapshot = market.fetch_fundamentals(code)
    if snapshot is None:
        raise VendorError("Failed to fetch fundamentals from BSE API")
    return FundamentalsSnapshotResponse.model_validate(snapshot)
