"""Static portfolio repository backed by a JSON document."""

import json
import logging
from dataclasses import fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from bse_portfolio.core.exceptions import PortfolioConfigError
from bse_portfolio.core.parsing import parse_mandatory
from bse_portfolio.domain.models import (
    FixedAttributes,
    Fundamentals,
    Holding,
    PriceSource,
    RealtimeData,
)

logger = logging.getLogger(__name__)

_FUNDAMENTAL_FIELDS = frozenset(f.name for f in fields(Fundamentals))


def _parse_fixed(raw: dict[str, Any]) -> FixedAttributes:
    purchase_price = parse_mandatory(raw.get("purchase_price"))
    qty = parse_mandatory(raw.get("qty"))
    investment = raw.get("investment")
    return FixedAttributes(
        purchase_price=purchase_price,
        qty=qty,
        # Sheets sometimes omit investment; it is always price x qty
        investment=parse_mandatory(investment) if investment is not None else purchase_price * qty,
        portfolio_percent=str(raw.get("portfolio_percent") or ""),
        stage2=bool(raw.get("stage2", False)),
    )


def _parse_realtime(raw: dict[str, Any]) -> RealtimeData:
    return RealtimeData(
        cmp=parse_mandatory(raw.get("cmp")),
        present_value=parse_mandatory(raw.get("present_value")),
        gain_loss=parse_mandatory(raw.get("gain_loss")),
        gain_loss_percent=str(raw.get("gain_loss_percent") or "0.00%"),
        market_cap=parse_mandatory(raw.get("market_cap")),
        last_updated=raw.get("last_updated"),
        price_source=PriceSource.STATIC,
    )


def _parse_fundamentals(raw: dict[str, Any]) -> Fundamentals:
    unknown = set(raw) - _FUNDAMENTAL_FIELDS
    if unknown:
        logger.debug("Ignoring unknown fundamentals fields: %s", sorted(unknown))
    return Fundamentals(**{k: v for k, v in raw.items() if k in _FUNDAMENTAL_FIELDS})


def parse_holding(raw: dict[str, Any]) -> Holding:
    """Build a Holding from one record of the portfolio document."""
    symbol = str(raw["symbol"]).strip()
    if not symbol:
        raise ValueError("holding without symbol")
    return Holding(
        symbol=symbol,
        company_name=str(raw.get("company_name") or symbol),
        sector=str(raw.get("sector") or ""),
        fixed=_parse_fixed(raw["fixed"]),
        realtime=_parse_realtime(raw.get("realtime") or {}),
        fundamentals=_parse_fundamentals(raw.get("fundamentals") or {}),
    )


@lru_cache(maxsize=None)
def load_holdings(path: str) -> tuple[Holding, ...]:
    """Load and cache the portfolio document once per process."""
    try:
        with open(path, encoding="utf-8") as fh:
            document = json.load(fh)
    except FileNotFoundError as exc:
        raise PortfolioConfigError(path, "file not found") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise PortfolioConfigError(path, str(exc)) from exc

    records = document.get("holdings") if isinstance(document, dict) else document
    if not isinstance(records, list):
        raise PortfolioConfigError(path, "expected a list of holdings")

    try:
        holdings = tuple(parse_holding(record) for record in records)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PortfolioConfigError(path, f"invalid holding record: {exc}") from exc

    logger.info("Loaded %d holdings from %s", len(holdings), path)
    return holdings


class StaticPortfolioRepository:
    """Read-only access to the configured holdings."""

    def __init__(self, path: Path):
        self._path = Path(path)

    def list_holdings(self) -> list[Holding]:
        """Get all holdings in document order."""
        return list(load_holdings(str(self._path)))

    def get_holding(self, symbol: str) -> Optional[Holding]:
        """Get the holding with this exact symbol."""
        for holding in load_holdings(str(self._path)):
            if holding.symbol == symbol:
                return holding
        return None

    def symbols(self) -> list[str]:
        """Distinct symbols, first-seen order."""
        return list(dict.fromkeys(h.symbol for h in load_holdings(str(self._path))))
