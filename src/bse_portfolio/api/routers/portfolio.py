"""Portfolio endpoints polled by the dashboard."""

from fastapi import APIRouter, Depends

from bse_portfolio.api.deps import get_analysis_service, get_portfolio_aggregator
from bse_portfolio.api.schemas import (
    HoldingResponse,
    PortfolioRealtimeResponse,
    PortfolioTotalsResponse,
    SectorSummaryResponse,
    SectorsResponse,
)
from bse_portfolio.core.exceptions import NotFoundError
from bse_portfolio.core.timezone import now_india
from bse_portfolio.services import AnalysisService, PortfolioAggregator

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("/realtime", response_model=PortfolioRealtimeResponse)
def get_portfolio_realtime(
    aggregator: PortfolioAggregator = Depends(get_portfolio_aggregator),
) -> PortfolioRealtimeResponse:
    """Return all holdings with live prices and fundamentals."""
    holdings = aggregator.aggregate_all()
    return PortfolioRealtimeResponse(
        holdings=[HoldingResponse.model_validate(h) for h in holdings],
        last_updated=now_india().isoformat(),
    )


@router.get("/realtime/{symbol}", response_model=HoldingResponse)
def get_holding_realtime(
    symbol: str,
    aggregator: PortfolioAggregator = Depends(get_portfolio_aggregator),
) -> HoldingResponse:
    """Return one holding with live data."""
    holding = aggregator.aggregate_one(symbol)
    if holding is None:
        raise NotFoundError("Holding", symbol)
    return HoldingResponse.model_validate(holding)


@router.get("/sectors", response_model=SectorsResponse)
def get_sector_summaries(
    aggregator: PortfolioAggregator = Depends(get_portfolio_aggregator),
    analysis: AnalysisService = Depends(get_analysis_service),
) -> SectorsResponse:
    """Return holdings grouped by sector, largest investment first."""
    holdings = aggregator.aggregate_all()
    return SectorsResponse(
        sectors=[SectorSummaryResponse.model_validate(s) for s in analysis.sector_summaries(holdings)],
        totals=PortfolioTotalsResponse.model_validate(analysis.totals(holdings)),
        last_updated=now_india().isoformat(),
    )
