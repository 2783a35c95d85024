"""Analysis service for portfolio summaries."""

from bse_portfolio.core.parsing import round2
from bse_portfolio.domain.models import EnrichedHolding
from bse_portfolio.domain.views import PortfolioTotals, SectorSummary
from bse_portfolio.services.portfolio_aggregator import format_gain_loss_percent

DEFAULT_SECTOR = "Others"


class AnalysisService:
    """
    Service for portfolio analytics.

    Groups enriched holdings by sector and computes totals.
    """

    def sector_summaries(self, holdings: list[EnrichedHolding]) -> list[SectorSummary]:
        """
        Group holdings by sector.

        Blank sectors fall under "Others". Sorted by total investment, largest first.
        """
        by_sector: dict[str, SectorSummary] = {}
        for holding in holdings:
            sector = holding.sector.strip() or DEFAULT_SECTOR
            summary = by_sector.setdefault(sector, SectorSummary(sector=sector))
            summary.holdings.append(holding)
            summary.total_investment += holding.fixed.investment
            summary.total_present_value += holding.realtime.present_value

        for summary in by_sector.values():
            summary.total_investment = round2(summary.total_investment)
            summary.total_present_value = round2(summary.total_present_value)
            summary.total_gain_loss = round2(summary.total_present_value - summary.total_investment)

        return sorted(by_sector.values(), key=lambda s: s.total_investment, reverse=True)

    def totals(self, holdings: list[EnrichedHolding]) -> PortfolioTotals:
        """Whole-portfolio investment, value and gain/loss."""
        investment = round2(sum(h.fixed.investment for h in holdings))
        present_value = round2(sum(h.realtime.present_value for h in holdings))
        gain_loss = round2(present_value - investment)
        return PortfolioTotals(
            total_investment=investment,
            total_present_value=present_value,
            total_gain_loss=gain_loss,
            gain_loss_percent=format_gain_loss_percent(gain_loss, investment),
            holdings_count=len(holdings),
        )
