"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends

from bse_portfolio.config.settings import get_settings
from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot
from bse_portfolio.providers import (
    BseIndiaClient,
    MarketDataProvider,
    StubMarketDataProvider,
)
from bse_portfolio.repositories import (
    ScripcodeCacheStore,
    StaticPortfolioRepository,
    TtlCacheStore,
    fundamentals_cache_store,
    price_cache_store,
)
from bse_portfolio.services import (
    AnalysisService,
    FundamentalsFetcher,
    MarketDataService,
    PortfolioAggregator,
    PriceFetcher,
    SymbolResolver,
)

# One provider per process so the HTTP session is reused across requests
_provider: Optional[MarketDataProvider] = None


def get_market_provider() -> MarketDataProvider:
    """Provide the configured MarketDataProvider instance."""
    global _provider
    if _provider is None:
        settings = get_settings()
        if settings.market_data_provider.lower() == "stub":
            _provider = StubMarketDataProvider()
        else:
            _provider = BseIndiaClient(
                api_base_url=settings.bse_api_base_url,
                search_url=settings.bse_search_url,
                timeout=settings.http_timeout_seconds,
            )
    return _provider


def reset_market_provider() -> None:
    """Drop the process-wide provider (after settings change)."""
    global _provider
    _provider = None


def close_market_provider() -> None:
    """Release the process-wide provider's connections at shutdown."""
    global _provider
    if _provider is not None:
        _provider.close()
        _provider = None


def get_portfolio_repo() -> StaticPortfolioRepository:
    """Provide StaticPortfolioRepository instance."""
    return StaticPortfolioRepository(get_settings().get_portfolio_file())


def get_scripcode_store() -> ScripcodeCacheStore:
    """Provide the permanent scripcode mapping store."""
    return ScripcodeCacheStore(get_settings().get_scripcode_cache_path())


def get_price_store() -> TtlCacheStore[PriceSnapshot]:
    """Provide the short-lived price cache store."""
    settings = get_settings()
    return price_cache_store(
        settings.get_price_cache_path(),
        ttl_seconds=settings.price_cache_ttl_seconds,
    )


def get_fundamentals_store() -> TtlCacheStore[FundamentalsSnapshot]:
    """Provide the long-lived fundamentals cache store."""
    settings = get_settings()
    return fundamentals_cache_store(
        settings.get_fundamentals_cache_path(),
        ttl_seconds=settings.fundamentals_cache_ttl_seconds,
    )


def get_symbol_resolver(
    provider: MarketDataProvider = Depends(get_market_provider),
) -> SymbolResolver:
    """Provide SymbolResolver instance."""
    return SymbolResolver(provider=provider)


def get_market_data_service(
    provider: MarketDataProvider = Depends(get_market_provider),
    price_store: TtlCacheStore[PriceSnapshot] = Depends(get_price_store),
    fundamentals_store: TtlCacheStore[FundamentalsSnapshot] = Depends(get_fundamentals_store),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    settings = get_settings()
    return MarketDataService(
        price_fetcher=PriceFetcher(
            provider,
            batch_size=settings.fetch_batch_size,
            batch_delay_seconds=settings.fetch_batch_delay_seconds,
        ),
        fundamentals_fetcher=FundamentalsFetcher(
            provider,
            batch_size=settings.fetch_batch_size,
            batch_delay_seconds=settings.fetch_batch_delay_seconds,
        ),
        price_store=price_store,
        fundamentals_store=fundamentals_store,
    )


def get_portfolio_aggregator(
    portfolio_repo: StaticPortfolioRepository = Depends(get_portfolio_repo),
    resolver: SymbolResolver = Depends(get_symbol_resolver),
    market_data_service: MarketDataService = Depends(get_market_data_service),
    scripcode_store: ScripcodeCacheStore = Depends(get_scripcode_store),
) -> PortfolioAggregator:
    """Provide PortfolioAggregator instance."""
    return PortfolioAggregator(
        portfolio_repo=portfolio_repo,
        resolver=resolver,
        market_data_service=market_data_service,
        scripcode_store=scripcode_store,
    )


def get_analysis_service() -> AnalysisService:
    """Provide AnalysisService instance."""
    return AnalysisService()
