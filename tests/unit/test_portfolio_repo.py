"""
Unit tests for the static portfolio repository.
"""

import json

import pytest

from bse_portfolio.core.exceptions import PortfolioConfigError
from bse_portfolio.domain.models import PriceSource
from bse_portfolio.repositories.portfolio_repo import (
    StaticPortfolioRepository,
    load_holdings,
    parse_holding,
)
from bse_portfolio.config.settings import Settings
from tests.conftest import holding_record, write_portfolio


# =============================================================================
# RECORD PARSING
# =============================================================================


class TestParseHolding:
    def test_parses_all_blocks(self):
        holding = parse_holding(holding_record("HDFCBANK", 100.0, 10, sector="Financial"))

        assert holding.symbol == "HDFCBANK"
        assert holding.company_name == "HDFCBANK Ltd"
        assert holding.fixed.investment == 1000.0
        assert holding.fixed.portfolio_percent == "1.00%"
        assert holding.realtime.market_cap == 1000.0
        assert holding.realtime.price_source == PriceSource.STATIC
        assert holding.fundamentals.pe_ttm == 10.0

    def test_missing_investment_is_price_times_qty(self):
        record = holding_record("INFY", 1500.0, 5)
        del record["fixed"]["investment"]

        assert parse_holding(record).fixed.investment == 7500.0

    def test_ignores_unknown_fundamentals(self):
        record = holding_record("INFY", 1500.0, 5, dividend_yield=1.2)

        holding = parse_holding(record)

        assert not hasattr(holding.fundamentals, "dividend_yield")

    def test_symbol_is_required(self):
        with pytest.raises(KeyError):
            parse_holding({"fixed": {}})

    def test_blank_symbol_rejected(self):
        with pytest.raises(ValueError):
            parse_holding(holding_record("  ", 1.0, 1))


# =============================================================================
# REPOSITORY
# =============================================================================


class TestStaticPortfolioRepository:
    def test_lists_in_document_order(self, portfolio_repo, portfolio_records):
        assert [h.symbol for h in portfolio_repo.list_holdings()] == [r["symbol"] for r in portfolio_records]

    def test_get_holding(self, portfolio_repo):
        assert portfolio_repo.get_holding("INFY").sector == "Technology"
        assert portfolio_repo.get_holding("infy") is None

    def test_symbols_are_distinct(self, tmp_path):
        path = write_portfolio(tmp_path / "dup.json", [
            holding_record("INFY", 1.0, 1),
            holding_record("INFY", 2.0, 1),
        ])

        assert StaticPortfolioRepository(path).symbols() == ["INFY"]

    def test_loaded_once_per_process(self, tmp_path):
        """
        GIVEN a portfolio document that has been read
        WHEN the file changes on disk
        THEN the repository keeps serving the first load
        """
        path = write_portfolio(tmp_path / "once.json", [holding_record("INFY", 1.0, 1)])
        repo = StaticPortfolioRepository(path)
        repo.list_holdings()

        write_portfolio(path, [holding_record("WIPRO", 1.0, 1)])

        assert repo.symbols() == ["INFY"]

    def test_accepts_bare_list(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([holding_record("INFY", 1.0, 1)]), encoding="utf-8")

        assert StaticPortfolioRepository(path).symbols() == ["INFY"]

    def test_missing_file_is_config_error(self, tmp_path):
        with pytest.raises(PortfolioConfigError) as exc_info:
            StaticPortfolioRepository(tmp_path / "absent.json").list_holdings()

        assert exc_info.value.code == "PORTFOLIO_CONFIG_ERROR"

    @pytest.mark.parametrize("content", [
        "not json",
        '{"holdings": {"symbol": "INFY"}}',
        '{"holdings": [{"symbol": "INFY"}]}',
    ])
    def test_malformed_document_is_config_error(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(PortfolioConfigError):
            load_holdings(str(path))

    def test_packaged_portfolio_loads(self):
        repo = StaticPortfolioRepository(Settings().get_portfolio_file())

        holdings = repo.list_holdings()

        assert len(holdings) == 8
        assert holdings[0].symbol == "HDFCBANK"
        assert "544252" in repo.symbols()
        assert all(h.fixed.investment > 0 for h in holdings)
