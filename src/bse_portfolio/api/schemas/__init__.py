"""Pydantic schemas for API request/response."""

from bse_portfolio.api.schemas.holding import (
    FixedResponse,
    RealtimeResponse,
    FundamentalsResponse,
    HoldingResponse,
    PortfolioRealtimeResponse,
    SectorSummaryResponse,
    PortfolioTotalsResponse,
    SectorsResponse,
)
from bse_portfolio.api.schemas.market import (
    PriceResponse,
    FundamentalsSnapshotResponse,
    CacheClearedResponse,
)

__all__ = [
    "FixedResponse",
    "RealtimeResponse",
    "FundamentalsResponse",
    "HoldingResponse",
    "PortfolioRealtimeResponse",
    "SectorSummaryResponse",
    "PortfolioTotalsResponse",
    "SectorsResponse",
    "PriceResponse",
    "FundamentalsSnapshotResponse",
    "CacheClearedResponse",
]
