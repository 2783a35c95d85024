"""View models for service outputs."""

from bse_portfolio.domain.views.market import PriceSnapshot, FundamentalsSnapshot
from bse_portfolio.domain.views.portfolio import SectorSummary, PortfolioTotals, ResolutionBatch

__all__ = [
    "PriceSnapshot",
    "FundamentalsSnapshot",
    "SectorSummary",
    "PortfolioTotals",
    "ResolutionBatch",
]
