"""
Unit tests for the offline stub provider and provider selection.
"""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from bse_portfolio.api import deps
from bse_portfolio.config.settings import Settings, reset_settings, set_settings
from bse_portfolio.providers import BseIndiaClient, StubMarketDataProvider
from bse_portfolio.main import app
from bse_portfolio.services import SymbolResolver


class TestStubMarketDataProvider:
    def test_known_scrip_has_fixed_price(self):
        snapshot = StubMarketDataProvider().get_price("500180")

        assert snapshot.company_name == "HDFC Bank Ltd"
        assert snapshot.current_price == 1712.40
        assert snapshot.change == 12.25

    def test_unknown_scrip_is_seeded(self):
        first = StubMarketDataProvider(seed=7).get_price("599999")
        second = StubMarketDataProvider(seed=7).get_price("599999")

        assert first.current_price == second.current_price
        assert first.current_price > 0

    def test_search_markup_resolves(self):
        """
        GIVEN the stub search markup
        WHEN resolved through the extraction strategies
        THEN the ticker maps to its scrip code
        """
        resolver = SymbolResolver(provider=StubMarketDataProvider())

        assert resolver.resolve("ASTRAL", {}) == "532830"
        assert resolver.resolve("NOSUCHCO", {}) is None

    def test_fundamentals(self):
        snapshot = StubMarketDataProvider().get_fundamentals("500209")

        assert snapshot.pe is not None
        assert snapshot.pb == 3.0

    def test_unknown_scrip_price_ignores_call_order(self):
        """
        GIVEN two stubs with the same seed
        WHEN one of them is asked for other codes first
        THEN both still quote the same price for the code
        """
        fresh = StubMarketDataProvider(seed=7)
        busy = StubMarketDataProvider(seed=7)
        busy.get_price("600001")
        busy.get_fundamentals("600002")

        assert busy.get_price("599999").current_price == fresh.get_price("599999").current_price


class TestProviderSelection:
    def test_stub_selected_by_setting(self, tmp_path):
        set_settings(Settings(market_data_provider="stub", cache_dir=tmp_path))
        deps.reset_market_provider()
        try:
            assert isinstance(deps.get_market_provider(), StubMarketDataProvider)
        finally:
            deps.reset_market_provider()
            reset_settings()

    def test_live_client_by_default(self, tmp_path):
        set_settings(Settings(market_data_provider="bse", cache_dir=tmp_path, http_timeout_seconds=5))
        deps.reset_market_provider()
        try:
            provider = deps.get_market_provider()
            assert isinstance(provider, BseIndiaClient)
            assert deps.get_market_provider() is provider
        finally:
            deps.reset_market_provider()
            reset_settings()


class TestProviderShutdown:
    def test_close_releases_session_and_forgets_provider(self):
        session = MagicMock()
        session.headers = {}
        deps.reset_market_provider()
        deps._provider = BseIndiaClient(session=session)

        deps.close_market_provider()

        session.close.assert_called_once_with()
        assert deps._provider is None

    def test_close_without_provider_is_noop(self):
        deps.reset_market_provider()

        deps.close_market_provider()

        assert deps._provider is None

    def test_app_shutdown_closes_provider(self, tmp_path):
        set_settings(Settings(market_data_provider="stub", cache_dir=tmp_path))
        deps.reset_market_provider()
        try:
            with TestClient(app) as client:
                client.get("/health")
                provider = deps.get_market_provider()
            assert deps._provider is None
            assert deps.get_market_provider() is not provider
        finally:
            deps.reset_market_provider()
            reset_settings()
