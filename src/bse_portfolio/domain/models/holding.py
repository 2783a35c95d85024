"""Portfolio holding models."""

from dataclasses import dataclass, field
from typing import Optional, Union

from bse_portfolio.domain.models.enums import PriceSource

# Ratios the static sheet stores either as numbers or preformatted text ("12.5%", "1.2K Cr")
NumberOrText = Optional[Union[float, str]]


@dataclass(frozen=True)
class FixedAttributes:
    """Purchase-time facts about a holding. Never change after load."""

    purchase_price: float
    qty: float
    investment: float
    portfolio_percent: str = ""
    stage2: bool = False


@dataclass(frozen=True)
class RealtimeData:
    """Market-derived values; the static sheet carries a baseline copy."""

    cmp: float = 0.0
    present_value: float = 0.0
    gain_loss: float = 0.0
    gain_loss_percent: str = "0.00%"
    market_cap: float = 0.0
    last_updated: Optional[str] = None
    price_source: PriceSource = PriceSource.STATIC


@dataclass(frozen=True)
class Fundamentals:
    """Valuation and growth ratios. Any field may be unknown."""

    pe_ttm: Optional[float] = None
    latest_earnings: Optional[float] = None
    revenue_ttm: NumberOrText = None
    ebitda_ttm: Optional[float] = None
    ebitda_percent: Optional[str] = None
    pat: NumberOrText = None
    pat_percent: Optional[str] = None
    cfo_march24: Optional[float] = None
    cfo_5_years: Optional[float] = None
    debt_to_equity: Optional[float] = None
    book_value: NumberOrText = None
    revenue_growth: Optional[str] = None
    ebitda_growth: Optional[str] = None
    profit_growth: Optional[str] = None
    market_cap_growth: Optional[str] = None
    price_to_sales: Optional[float] = None
    cfo_to_ebitda: Optional[str] = None
    cfo_to_pat: Optional[str] = None
    price_to_book: Optional[float] = None


@dataclass(frozen=True)
class Holding:
    """
    A position from the static portfolio document.

    IMPORTANT: Never mutate; enrichment works on an EnrichedHolding copy.
    """

    symbol: str
    company_name: str
    sector: str
    fixed: FixedAttributes
    realtime: RealtimeData = field(default_factory=RealtimeData)
    fundamentals: Fundamentals = field(default_factory=Fundamentals)


@dataclass
class EnrichedHolding:
    """A holding as returned by one aggregation request."""

    symbol: str
    company_name: str
    sector: str
    fixed: FixedAttributes
    realtime: RealtimeData
    fundamentals: Fundamentals

    @classmethod
    def from_holding(cls, holding: Holding) -> "EnrichedHolding":
        """Start from the static values; blocks are replaced wholesale later."""
        return cls(
            symbol=holding.symbol,
            company_name=holding.company_name,
            sector=holding.sector,
            fixed=holding.fixed,
            realtime=holding.realtime,
            fundamentals=holding.fundamentals,
        )
