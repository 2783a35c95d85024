"""Pydantic schemas for portfolio endpoints."""

from typing import Optional, Union

from pydantic import BaseModel

from bse_portfolio.domain.models.enums import PriceSource


class FixedResponse(BaseModel):
    """Purchase-time attributes of a holding."""

    model_config = {"from_attributes": True}

    purchase_price: float
    qty: float
    investment: float
    portfolio_percent: str
    stage2: bool


class RealtimeResponse(BaseModel):
    """Market-derived values of a holding."""

    model_config = {"from_attributes": True}

    cmp: float
    present_value: float
    gain_loss: float
    gain_loss_percent: str
    market_cap: float
    last_updated: Optional[str] = None
    price_source: PriceSource


class FundamentalsResponse(BaseModel):
    """Valuation ratios of a holding; any field may be null."""

    model_config = {"from_attributes": True}

    pe_ttm: Optional[float] = None
    latest_earnings: Optional[float] = None
    revenue_ttm: Optional[Union[float, str]] = None
    ebitda_ttm: Optional[float] = None
    ebitda_percent: Optional[str] = None
    pat: Optional[Union[float, str]] = None
    pat_percent: Optional[str] = None
    cfo_march24: Optional[float] = None
    cfo_5_years: Optional[float] = None
    debt_to_equity: Optional[float] = None
    book_value: Optional[Union[float, str]] = None
    revenue_growth: Optional[str] = None
    ebitda_growth: Optional[str] = None
    profit_growth: Optional[str] = None
    market_cap_growth: Optional[str] = None
    price_to_sales: Optional[float] = None
    cfo_to_ebitda: Optional[str] = None
    cfo_to_pat: Optional[str] = None
    price_to_book: Optional[float] = None


class HoldingResponse(BaseModel):
    """One enriched holding."""

    model_config = {"from_attributes": True}

    symbol: str
    company_name: str
    sector: str
    fixed: FixedResponse
    realtime: RealtimeResponse
    fundamentals: FundamentalsResponse


class PortfolioRealtimeResponse(BaseModel):
    """Response for GET /api/portfolio/realtime."""

    holdings: list[HoldingResponse]
    last_updated: str


class SectorSummaryResponse(BaseModel):
    """Totals for one sector."""

    model_config = {"from_attributes": True}

    sector: str
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    holdings: list[HoldingResponse]


class PortfolioTotalsResponse(BaseModel):
    """Whole-portfolio totals."""

    model_config = {"from_attributes": True}

    total_investment: float
    total_present_value: float
    total_gain_loss: float
    gain_loss_percent: str
    holdings_count: int


class SectorsResponse(BaseModel):
    """Response for GET /api/portfolio/sectors."""

    sectors: list[SectorSummaryResponse]
    totals: PortfolioTotalsResponse
    last_updated: str
