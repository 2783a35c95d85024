"""Stub market data provider for offline/testing use."""

import random

from bse_portfolio.core.timezone import now_india
from bse_portfolio.domain.views import PriceSnapshot, FundamentalsSnapshot


# Deterministic fake data for the sample portfolio: ticker -> (code, name, price, prev close)
_STUB_SCRIPS: dict[str, tuple[str, str, float, float]] = {
    "HDFCBANK": ("500180", "HDFC Bank Ltd", 1712.40, 1700.15),
    "INFY": ("500209", "Infosys Ltd", 1881.25, 1894.40),
    "TATAPOWER": ("500400", "Tata Power Company Ltd", 401.10, 395.05),
    "ASTRAL": ("532830", "Astral Ltd", 1352.00, 1366.55),
    "PIDILITIND": ("500331", "Pidilite Industries Ltd", 2968.30, 2950.00),
    "DMART": ("540376", "Avenue Supermarts Ltd", 3644.85, 3610.00),
    "KPITTECH": ("542651", "KPIT Technologies Ltd", 1310.55, 1296.00),
    "BAJAJHFL": ("544252", "Bajaj Housing Finance Ltd", 121.35, 119.80),
}

_BY_CODE = {code: (ticker, name, ltp, prev) for ticker, (code, name, ltp, prev) in _STUB_SCRIPS.items()}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Known scrips get fixed prices; unknown numeric codes get seeded random
    prices. Search markup mimics the vendor's result rows.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def get_price(self, scripcode: str) -> PriceSnapshot:
        """Return a stub price snapshot."""
        if scripcode in _BY_CODE:
            _, name, ltp, prev_close = _BY_CODE[scripcode]
        else:
            name = f"Scrip {scripcode}"
            # Per-code generator: the result must not depend on call order across threads
            rng = random.Random(f"{self._seed}:{scripcode}")
            ltp = round(50 + rng.random() * 200, 2)
            prev_close = round(ltp / (1 + (rng.random() - 0.5) * 0.04), 2)

        change = round(ltp - prev_close, 2)
        return PriceSnapshot(
            scripcode=scripcode,
            company_name=name,
            current_price=ltp,
            previous_close=prev_close,
            open=prev_close,
            high=max(ltp, prev_close),
            low=min(ltp, prev_close),
            change=change,
            change_percent=round(change / prev_close * 100, 2),
            last_updated=now_india().isoformat(),
        )

    def get_fundamentals(self, scripcode: str) -> FundamentalsSnapshot:
        """Return stub ratios derived from the stub price."""
        price = self.get_price(scripcode).current_price
        eps = round(price / 30, 2)
        return FundamentalsSnapshot(
            scripcode=scripcode,
            sector="Stub",
            industry="Stub",
            face_value=1.0,
            eps=eps,
            pe=round(price / eps, 2),
            pb=3.0,
            roe=15.0,
        )

    def search_symbol(self, symbol: str) -> str:
        """Return search markup for known tickers; unknown tickers match nothing."""
        entry = _STUB_SCRIPS.get(symbol.upper())
        if entry is None:
            return ""
        code, name, _, _ = entry
        slug = name.lower().replace(" ", "-")
        return (
            f"<li><a href='https://www.bseindia.com/stock-share-price/{slug}/"
            f"{symbol.lower()}/{code}/'>{name}</a></li>"
        )

    def close(self) -> None:
        """Nothing to release."""
