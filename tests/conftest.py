"""
Pytest configuration and fixtures for the portfolio dashboard tests.

This module provides:
- In-memory cache stores and a controllable clock
- A recording market data provider with per-code failures
- A small static portfolio written to a temp file
- Service fixtures wired the same way the API wires them
- A FastAPI test client backed by temp caches and the stub provider
"""

import json
import threading
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

import pytest
import requests
from fastapi.testclient import TestClient

from bse_portfolio.api import deps
from bse_portfolio.config.settings import Settings, reset_settings, set_settings
from bse_portfolio.domain.views import FundamentalsSnapshot, PriceSnapshot
from bse_portfolio.main import app
from bse_portfolio.repositories import StaticPortfolioRepository
from bse_portfolio.services import (
    FundamentalsFetcher,
    MarketDataService,
    PortfolioAggregator,
    PriceFetcher,
    SymbolResolver,
)

T = TypeVar("T")


# =============================================================================
# CACHE FAKES
# =============================================================================


class InMemoryCacheStore(Generic[T]):
    """CacheStore fake that records how often it was read and written."""

    def __init__(self, initial: Optional[dict[str, T]] = None):
        self.data: dict[str, T] = dict(initial or {})
        self.load_count = 0
        self.save_count = 0

    def load(self) -> dict[str, T]:
        self.load_count += 1
        return dict(self.data)

    def save(self, mapping: dict[str, T]) -> None:
        self.save_count += 1
        self.data = dict(mapping)


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


# =============================================================================
# MARKET DATA FAKES
# =============================================================================


def make_price(scripcode: str, current_price: float, name: str = "") -> PriceSnapshot:
    return PriceSnapshot(
        scripcode=scripcode,
        company_name=name or f"Company {scripcode}",
        current_price=current_price,
        previous_close=current_price,
        open=current_price,
        high=current_price,
        low=current_price,
        last_updated="17 Oct 25 | 04:00 PM",
    )


def make_fundamentals(
    scripcode: str,
    pe: Optional[float] = None,
    pb: Optional[float] = None,
    eps: Optional[float] = None,
) -> FundamentalsSnapshot:
    return FundamentalsSnapshot(scripcode=scripcode, sector="Financials", face_value=10.0, pe=pe, pb=pb, eps=eps)


def search_markup(symbol: str, scripcode: str) -> str:
    """A vendor-like search result row."""
    return (
        f"<li class='quotemenu'><a href='https://www.bseindia.com/stock-share-price/"
        f"{symbol.lower()}-ltd/{symbol.lower()}/{scripcode}/'>"
        f"<strong>{symbol}</strong>&nbsp;&nbsp;&nbsp;INE040A01034&nbsp;&nbsp;&nbsp;{scripcode}</a></li>"
    )


class RecordingMarketProvider:
    """
    Deterministic provider that records every call.

    Codes listed in ``failing`` raise a simulated network error.
    """

    def __init__(
        self,
        prices: Optional[dict[str, float]] = None,
        fundamentals: Optional[dict[str, FundamentalsSnapshot]] = None,
        symbols: Optional[dict[str, str]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.prices = dict(prices or {})
        self.fundamentals = dict(fundamentals or {})
        self.symbols = dict(symbols or {})
        self.failing = set(failing or ())
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def _record(self, kind: str, key: str) -> None:
        with self._lock:
            self.calls.append((kind, key))

    def calls_of(self, kind: str) -> list[str]:
        return [key for k, key in self.calls if k == kind]

    def get_price(self, scripcode: str) -> PriceSnapshot:
        self._record("price", scripcode)
        if scripcode in self.failing:
            raise requests.ConnectionError(f"simulated network error for {scripcode}")
        if scripcode not in self.prices:
            raise requests.HTTPError(f"404 for {scripcode}")
        return make_price(scripcode, self.prices[scripcode])

    def get_fundamentals(self, scripcode: str) -> FundamentalsSnapshot:
        self._record("fundamentals", scripcode)
        if scripcode in self.failing:
            raise requests.ConnectionError(f"simulated network error for {scripcode}")
        if scripcode not in self.fundamentals:
            raise requests.HTTPError(f"404 for {scripcode}")
        return self.fundamentals[scripcode]

    def search_symbol(self, symbol: str) -> str:
        self._record("search", symbol)
        if symbol in self.failing:
            raise requests.ConnectionError(f"simulated network error for {symbol}")
        code = self.symbols.get(symbol)
        return search_markup(symbol, code) if code else "<ul></ul>"

    def close(self) -> None:
        self.closed = True


class RecordingSleep:
    """Replacement for time.sleep that records delays instead of sleeping."""

    def __init__(self, events: Optional[list] = None):
        self.delays: list[float] = []
        self._events = events

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self._events is not None:
            self._events.append(("sleep", seconds))


# =============================================================================
# PORTFOLIO FIXTURES
# =============================================================================


def holding_record(
    symbol: str,
    purchase_price: float,
    qty: float,
    sector: str = "Financial",
    investment: Optional[float] = None,
    **fundamentals: Any,
) -> dict[str, Any]:
    """One record of the static portfolio document."""
    investment = purchase_price * qty if investment is None else investment
    return {
        "symbol": symbol,
        "company_name": f"{symbol} Ltd",
        "sector": sector,
        "fixed": {
            "purchase_price": purchase_price,
            "qty": qty,
            "investment": investment,
            "portfolio_percent": "1.00%",
            "stage2": False,
        },
        "realtime": {
            "cmp": purchase_price,
            "present_value": investment,
            "gain_loss": 0,
            "gain_loss_percent": "+0.00%",
            "market_cap": 1000.0,
        },
        "fundamentals": {"pe_ttm": 10.0, "price_to_book": 1.5, "latest_earnings": 5.0, **fundamentals},
    }


def write_portfolio(path: Path, records: list[dict[str, Any]]) -> Path:
    path.write_text(json.dumps({"holdings": records}), encoding="utf-8")
    return path


@pytest.fixture
def portfolio_records() -> list[dict[str, Any]]:
    """Three tickers, one literal scrip code and one unlisted symbol."""
    return [
        holding_record("HDFCBANK", 100.0, 10, sector="Financial"),
        holding_record("544252", 130.0, 100, sector="Financial"),
        holding_record("INFY", 1500.0, 5, sector="Technology"),
        holding_record("NOSUCHCO", 50.0, 20, sector="Consumer"),
        holding_record("TATAPOWER", 200.0, 25, sector="Power"),
    ]


@pytest.fixture
def portfolio_file(tmp_path, portfolio_records) -> Path:
    return write_portfolio(tmp_path / "portfolio.json", portfolio_records)


@pytest.fixture
def portfolio_repo(portfolio_file) -> StaticPortfolioRepository:
    return StaticPortfolioRepository(portfolio_file)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_provider() -> RecordingMarketProvider:
    """Provider that knows every sample symbol except NOSUCHCO."""
    return RecordingMarketProvider(
        prices={"500180": 120.0, "544252": 119.8, "500209": 1800.0, "500400": 180.0},
        fundamentals={
            "500180": make_fundamentals("500180", pe=19.5, pb=2.8, eps=91.4),
            "544252": make_fundamentals("544252", pe=45.0, pb=None, eps=None),
            "500209": make_fundamentals("500209", pe=28.9, pb=8.7, eps=63.4),
            "500400": make_fundamentals("500400", pe=32.4, pb=3.7, eps=12.2),
        },
        symbols={"HDFCBANK": "500180", "INFY": "500209", "TATAPOWER": "500400"},
    )


@pytest.fixture
def scripcode_store() -> InMemoryCacheStore[str]:
    return InMemoryCacheStore()


@pytest.fixture
def price_store() -> InMemoryCacheStore[PriceSnapshot]:
    return InMemoryCacheStore()


@pytest.fixture
def fundamentals_store() -> InMemoryCacheStore[FundamentalsSnapshot]:
    return InMemoryCacheStore()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def market_data_service(
    market_provider,
    price_store,
    fundamentals_store,
    recording_sleep,
) -> MarketDataService:
    return MarketDataService(
        price_fetcher=PriceFetcher(market_provider, sleep=recording_sleep),
        fundamentals_fetcher=FundamentalsFetcher(market_provider, sleep=recording_sleep),
        price_store=price_store,
        fundamentals_store=fundamentals_store,
    )


@pytest.fixture
def aggregator(
    portfolio_repo,
    market_provider,
    market_data_service,
    scripcode_store,
) -> PortfolioAggregator:
    return PortfolioAggregator(
        portfolio_repo=portfolio_repo,
        resolver=SymbolResolver(provider=market_provider),
        market_data_service=market_data_service,
        scripcode_store=scripcode_store,
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def test_settings(tmp_path, portfolio_file) -> Settings:
    """Settings pointing at temp caches and the sample portfolio."""
    settings = Settings(
        cache_dir=tmp_path / "cache",
        portfolio_file=portfolio_file,
        fetch_batch_delay_seconds=0,
        market_data_provider="stub",
    )
    set_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture
def client(test_settings, market_provider) -> TestClient:
    """Provide FastAPI test client with the recording provider."""
    app.dependency_overrides[deps.get_market_provider] = lambda: market_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
