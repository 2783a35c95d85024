"""Batched, rate-limited vendor fetches and the cache-first market data service."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Generic, Iterable, Optional, TypeVar

from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot
from bse_portfolio.providers.market_data_provider import MarketDataProvider
from bse_portfolio.repositories.protocols import CacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY_SECONDS = 1.0


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split ``items`` into consecutive lists of at most ``size``."""
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchFetcher(Generic[T]):
    """
    Fixed-window rate limiter around a single-code vendor call.

    Codes are fetched in batches; every call in a batch runs concurrently and
    a fixed pause separates consecutive batches (none after the last).
    """

    kind = "data"

    def __init__(
        self,
        provider: MarketDataProvider,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._provider = provider
        self._batch_size = batch_size
        self._batch_delay = batch_delay_seconds
        self._sleep = sleep

    def _fetch(self, scripcode: str) -> T:
        raise NotImplementedError

    def fetch_one(self, scripcode: str) -> Optional[T]:
        """Fetch one code. Errors are logged and yield None."""
        try:
            return self._fetch(scripcode)
        except Exception as exc:
            logger.warning("Error fetching BSE %s for %s: %s", self.kind, scripcode, exc)
            return None

    def fetch_batch(self, batch: list[str]) -> dict[str, T]:
        """Fetch one batch concurrently, dropping failures."""
        results: dict[str, T] = {}
        with ThreadPoolExecutor(max_workers=len(batch)) as pool:
            for code, snapshot in zip(batch, pool.map(self.fetch_one, batch)):
                if snapshot is not None:
                    results[code] = snapshot
        return results

    def fetch_many(self, scripcodes: Iterable[str]) -> dict[str, T]:
        """Fetch all codes batch by batch and merge the results."""
        codes = list(dict.fromkeys(scripcodes))
        if not codes:
            return {}

        batches = chunked(codes, self._batch_size)
        results: dict[str, T] = {}
        for index, batch in enumerate(batches):
            results.update(self.fetch_batch(batch))
            if index < len(batches) - 1:
                self._sleep(self._batch_delay)

        logger.info(
            "Fetched BSE %s for %d of %d scrip codes in %d batches",
            self.kind, len(results), len(codes), len(batches),
        )
        return results


class PriceFetcher(BatchFetcher[PriceSnapshot]):
    """Current price fetcher."""

    kind = "price"

    def _fetch(self, scripcode: str) -> PriceSnapshot:
        return self._provider.get_price(scripcode)


class FundamentalsFetcher(BatchFetcher[FundamentalsSnapshot]):
    """Valuation ratio fetcher."""

    kind = "fundamentals"

    def _fetch(self, scripcode: str) -> FundamentalsSnapshot:
        return self._provider.get_fundamentals(scripcode)


def load_fetch_merge(
    scripcodes: list[str],
    store: CacheStore[T],
    fetcher: BatchFetcher[T],
) -> dict[str, T]:
    """
    Cache-first lookup.

    Starts from the live cache entries, fetches only the missing codes and
    persists the merged whole when anything new was requested.
    """
    if not scripcodes:
        return {}

    result = store.load()
    missing = [code for code in dict.fromkeys(scripcodes) if code not in result]
    if not missing:
        logger.debug("Using cached BSE %s for all %d scrip codes", fetcher.kind, len(scripcodes))
        return result

    logger.info("Fetching BSE %s for %d missing scrip codes", fetcher.kind, len(missing))
    result.update(fetcher.fetch_many(missing))
    store.save(result)
    return result


class MarketDataService:
    """
    Service for fetching market data (prices, fundamentals).

    Wraps the batched fetchers with the persistent price and fundamentals
    caches.
    """

    def __init__(
        self,
        price_fetcher: PriceFetcher,
        fundamentals_fetcher: FundamentalsFetcher,
        price_store: CacheStore[PriceSnapshot],
        fundamentals_store: CacheStore[FundamentalsSnapshot],
    ):
        self._price_fetcher = price_fetcher
        self._fundamentals_fetcher = fundamentals_fetcher
        self._price_store = price_store
        self._fundamentals_store = fundamentals_store

    def get_prices(self, scripcodes: list[str]) -> dict[str, PriceSnapshot]:
        """Prices for codes, from the short-lived cache where possible."""
        return load_fetch_merge(scripcodes, self._price_store, self._price_fetcher)

    def get_fundamentals(self, scripcodes: list[str]) -> dict[str, FundamentalsSnapshot]:
        """Fundamentals for codes, from the long-lived cache where possible."""
        return load_fetch_merge(scripcodes, self._fundamentals_store, self._fundamentals_fetcher)

    def fetch_price(self, scripcode: str) -> Optional[PriceSnapshot]:
        """Uncached single price lookup."""
        return self._price_fetcher.fetch_one(scripcode)

    def fetch_fundamentals(self, scripcode: str) -> Optional[FundamentalsSnapshot]:
        """Uncached single fundamentals lookup."""
        return self._fundamentals_fetcher.fetch_one(scripcode)
