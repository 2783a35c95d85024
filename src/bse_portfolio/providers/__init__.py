"""Market data providers module."""

from bse_portfolio.providers.market_data_provider import MarketDataProvider
from bse_portfolio.providers.bse_client import BseIndiaClient
from bse_portfolio.providers.stub_provider import StubMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "BseIndiaClient",
    "StubMarketDataProvider",
]
