"""Portfolio aggregation: static holdings enriched with live vendor data."""

import logging
from dataclasses import replace
from typing import Optional

from bse_portfolio.core.parsing import round2
from bse_portfolio.domain.models import (
    EnrichedHolding,
    Fundamentals,
    Holding,
    PriceSource,
    RealtimeData,
)
from bse_portfolio.domain.views import (
    FundamentalsSnapshot,
    PriceSnapshot,
    ResolutionBatch,
)
from bse_portfolio.repositories.portfolio_repo import StaticPortfolioRepository
from bse_portfolio.repositories.protocols import CacheStore
from bse_portfolio.services.market_data_service import MarketDataService
from bse_portfolio.services.symbol_resolver import SymbolResolver

logger = logging.getLogger(__name__)


def format_gain_loss_percent(gain_loss: float, investment: float) -> str:
    """'+20.00%' / '-5.25%'; '0.00%' when nothing was invested."""
    if investment == 0:
        return "0.00%"
    percent = gain_loss / investment * 100
    # Sign follows the rounded text so tiny or negative-zero losses print "+0.00%"
    text = f"{abs(percent):.2f}"
    sign = "-" if percent < 0 and text != "0.00" else "+"
    return f"{sign}{text}%"


def apply_price(holding: Holding, price: PriceSnapshot) -> RealtimeData:
    """
    Recompute value fields from a fresh price.

    present_value = cmp × qty, gain_loss = present_value - investment.
    Market cap is not supplied by the price endpoint and keeps its baseline.
    """
    investment = holding.fixed.investment
    present_value = round2(price.current_price * holding.fixed.qty)
    gain_loss = round2(present_value - investment)
    return replace(
        holding.realtime,
        cmp=price.current_price,
        present_value=present_value,
        gain_loss=gain_loss,
        gain_loss_percent=format_gain_loss_percent(gain_loss, investment),
        last_updated=price.last_updated,
        price_source=PriceSource.BSE,
    )


def overlay_fundamentals(baseline: Fundamentals, fetched: FundamentalsSnapshot) -> Fundamentals:
    """Overlay P/E, P/B and EPS; fields the vendor left empty keep the baseline."""
    return replace(
        baseline,
        pe_ttm=fetched.pe if fetched.pe is not None else baseline.pe_ttm,
        price_to_book=fetched.pb if fetched.pb is not None else baseline.price_to_book,
        latest_earnings=fetched.eps if fetched.eps is not None else baseline.latest_earnings,
    )


class PortfolioAggregator:
    """
    Combines static holdings with resolved scrip codes, prices and fundamentals.

    Each call recomputes everything from the caches and the vendor; nothing
    is kept between calls except what the cache stores persist.
    """

    def __init__(
        self,
        portfolio_repo: StaticPortfolioRepository,
        resolver: SymbolResolver,
        market_data_service: MarketDataService,
        scripcode_store: CacheStore[str],
    ):
        self._portfolio = portfolio_repo
        self._resolver = resolver
        self._market = market_data_service
        self._scripcodes = scripcode_store

    def aggregate_all(self) -> list[EnrichedHolding]:
        """Enrich every holding, preserving portfolio order."""
        return self._enrich(self._portfolio.list_holdings())

    def aggregate_one(self, symbol: str) -> Optional[EnrichedHolding]:
        """Enrich a single holding; None if the symbol is not in the portfolio."""
        holding = self._portfolio.get_holding(symbol)
        if holding is None:
            return None
        return self._enrich([holding])[0]

    def resolve_symbols(self, symbols: list[str]) -> ResolutionBatch:
        """Resolve symbols and persist newly discovered mappings in one write."""
        known = self._scripcodes.load()
        batch = self._resolver.resolve_all(symbols, known)
        if batch.discovered:
            self._scripcodes.save({**known, **batch.discovered})
        return batch

    def _enrich(self, holdings: list[Holding]) -> list[EnrichedHolding]:
        if not holdings:
            return []

        symbols = list(dict.fromkeys(h.symbol for h in holdings))
        resolution = self.resolve_symbols(symbols)
        scripcodes = list(dict.fromkeys(resolution.resolved.values()))

        fundamentals = self._market.get_fundamentals(scripcodes)
        prices = self._market.get_prices(scripcodes)

        return [
            self._enrich_one(holding, resolution.resolved.get(holding.symbol), prices, fundamentals)
            for holding in holdings
        ]

    def _enrich_one(
        self,
        holding: Holding,
        scripcode: Optional[str],
        prices: dict[str, PriceSnapshot],
        fundamentals: dict[str, FundamentalsSnapshot],
    ) -> EnrichedHolding:
        enriched = EnrichedHolding.from_holding(holding)
        if scripcode is None:
            return enriched

        try:
            price = prices.get(scripcode)
            if price is not None:
                enriched.realtime = apply_price(holding, price)

            fetched = fundamentals.get(scripcode)
            if fetched is not None:
                enriched.fundamentals = overlay_fundamentals(holding.fundamentals, fetched)
        except Exception:
            # Keep existing data if anything about this holding fails
            logger.exception("Error enriching %s (%s)", holding.symbol, scripcode)
            return EnrichedHolding.from_holding(holding)

        return enriched
