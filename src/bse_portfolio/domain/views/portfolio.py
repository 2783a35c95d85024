"""View models for portfolio outputs."""

from dataclasses import dataclass, field

from bse_portfolio.domain.models import EnrichedHolding


@dataclass
class SectorSummary:
    """Totals for all holdings in one sector."""

    sector: str
    total_investment: float = 0.0
    total_present_value: float = 0.0
    total_gain_loss: float = 0.0
    holdings: list[EnrichedHolding] = field(default_factory=list)


@dataclass
class ResolutionBatch:
    """Outcome of resolving a set of symbols in one request."""

    resolved: dict[str, str] = field(default_factory=dict)
    discovered: dict[str, str] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)


@dataclass
class PortfolioTotals:
    """Whole-portfolio totals."""

    total_investment: float = 0.0
    total_present_value: float = 0.0
    total_gain_loss: float = 0.0
    gain_loss_percent: str = "0.00%"
    holdings_count: int = 0
