"""Market data provider protocol."""

from typing import Protocol

from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Implementations talk to one vendor and may raise on transport or payload
    errors; callers (the fetchers and the symbol resolver) decide how to
    degrade.
    """

    def get_price(self, scripcode: str) -> PriceSnapshot:
        """Fetch the current price snapshot for a scrip code."""
        ...

    def get_fundamentals(self, scripcode: str) -> FundamentalsSnapshot:
        """Fetch valuation ratios for a scrip code."""
        ...

    def search_symbol(self, symbol: str) -> str:
        """Run the vendor's free-text symbol search and return its raw markup."""
        ...

    def close(self) -> None:
        """Release any network resources held by the provider."""
        ...
