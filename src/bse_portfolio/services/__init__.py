"""Service layer - business logic orchestration."""

from bse_portfolio.services.symbol_resolver import SymbolResolver
from bse_portfolio.services.market_data_service import (
    MarketDataService,
    PriceFetcher,
    FundamentalsFetcher,
)
from bse_portfolio.services.portfolio_aggregator import PortfolioAggregator
from bse_portfolio.services.analysis_service import AnalysisService

__all__ = [
    "SymbolResolver",
    "MarketDataService",
    "PriceFetcher",
    "FundamentalsFetcher",
    "PortfolioAggregator",
    "AnalysisService",
]
