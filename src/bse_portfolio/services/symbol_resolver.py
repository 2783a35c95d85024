"""
Symbol to BSE scrip code resolution.

Tickers in the static portfolio are either already scrip codes (all
digits) or exchange symbols like ``HDFCBANK``. Symbols are looked up in the
permanent mapping first; misses go to the vendor's search box, whose HTML
is scraped with an ordered list of extraction strategies.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence

from bse_portfolio.domain.views import ResolutionBatch
from bse_portfolio.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)

_SCRIPCODE_RE = re.compile(r"\d+", re.ASCII)

# Vendor policy, not a computed invariant: BSE equity codes seen so far are
# six digits starting at 500000. Only the last-resort strategy applies it.
PLAUSIBLE_SCRIPCODE_RANGE = (500000, 999999)

DEFAULT_MAX_WORKERS = 8


def is_scripcode(value: str) -> bool:
    """True iff ``value`` is a non-empty string of ASCII digits."""
    return bool(_SCRIPCODE_RE.fullmatch(value))


def in_plausible_range(code: str) -> bool:
    low, high = PLAUSIBLE_SCRIPCODE_RANGE
    return is_scripcode(code) and low <= int(code) <= high


def _always(code: str) -> bool:
    return True


@dataclass(frozen=True)
class ExtractionStrategy:
    """One way of pulling a scrip code out of search markup."""

    name: str
    pattern: re.Pattern
    is_plausible: Callable[[str], bool] = _always

    def extract(self, markup: str) -> Optional[str]:
        """First plausible ``code`` group in the markup, or None."""
        for match in self.pattern.finditer(markup):
            code = match.group("code")
            if self.is_plausible(code):
                return code
        return None


URL_PATH_STRATEGY = ExtractionStrategy(
    name="url_path",
    # .../stock-share-price/hdfc-bank-ltd/hdfcbank/500180/
    pattern=re.compile(r"/stock-share-price/[^/\s'\"]+/[^/\s'\"]+/(?P<code>\d+)/?", re.IGNORECASE),
)

ADJACENT_ISIN_STRATEGY = ExtractionStrategy(
    name="adjacent_isin",
    # HDFCBANK&nbsp;&nbsp;INE040A01034&nbsp;&nbsp;500180
    pattern=re.compile(r"\bIN[A-Z0-9]{10}(?:\s|&nbsp;|</?\w+[^>]*>)+(?P<code>\d{6})\b"),
)

NUMERIC_RANGE_STRATEGY = ExtractionStrategy(
    name="numeric_range",
    pattern=re.compile(r"(?<!\d)(?P<code>\d{6})(?!\d)"),
    is_plausible=in_plausible_range,
)

EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    URL_PATH_STRATEGY,
    ADJACENT_ISIN_STRATEGY,
    NUMERIC_RANGE_STRATEGY,
)


def extract_scripcode(
    markup: str,
    strategies: Sequence[ExtractionStrategy] = EXTRACTION_STRATEGIES,
) -> Optional[str]:
    """Try each strategy in priority order; stop at the first match."""
    for strategy in strategies:
        code = strategy.extract(markup)
        if code is not None:
            logger.debug("Extracted scrip code %s via %s", code, strategy.name)
            return code
    return None


class SymbolResolver:
    """
    Resolves portfolio symbols to scrip codes.

    The resolver never writes the mapping store itself; callers collect
    ``ResolutionBatch.discovered`` and persist it once per request.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        strategies: Sequence[ExtractionStrategy] = EXTRACTION_STRATEGIES,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._provider = provider
        self._strategies = tuple(strategies)
        self._max_workers = max(1, max_workers)

    def search(self, symbol: str) -> Optional[str]:
        """Network lookup. Returns None on failure or when nothing matches."""
        try:
            markup = self._provider.search_symbol(symbol)
        except Exception as exc:
            # Graceful degradation: the holding keeps its static data this run
            logger.warning("Symbol search failed for %s: %s", symbol, exc)
            return None

        if not markup:
            return None
        return extract_scripcode(markup, self._strategies)

    def resolve(self, symbol: str, known: Mapping[str, str]) -> Optional[str]:
        """Resolve one symbol: literal code, then cached mapping, then search."""
        if is_scripcode(symbol):
            return symbol
        cached = known.get(symbol)
        if cached:
            return cached
        return self.search(symbol)

    def resolve_all(self, symbols: Iterable[str], known: Mapping[str, str]) -> ResolutionBatch:
        """Resolve distinct symbols, searching cache misses concurrently."""
        batch = ResolutionBatch()
        pending: list[str] = []

        for symbol in dict.fromkeys(symbols):
            if is_scripcode(symbol):
                batch.resolved[symbol] = symbol
            elif known.get(symbol):
                batch.resolved[symbol] = known[symbol]
            else:
                pending.append(symbol)

        if pending:
            workers = min(self._max_workers, len(pending))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                found = list(pool.map(self.search, pending))

            for symbol, code in zip(pending, found):
                if code is None:
                    batch.unresolved.append(symbol)
                else:
                    batch.resolved[symbol] = code
                    batch.discovered[symbol] = code

        if batch.discovered:
            logger.info("Resolved %d new symbols via search", len(batch.discovered))
        if batch.unresolved:
            logger.warning("Could not resolve symbols: %s", ", ".join(batch.unresolved))
        return batch
