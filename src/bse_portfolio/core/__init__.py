"""Core utilities and shared functionality."""

from bse_portfolio.core.timezone import (
    now_india,
    epoch_millis,
    INDIA_TZ,
)
from bse_portfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    VendorError,
    PortfolioConfigError,
)
from bse_portfolio.core.parsing import (
    Presence,
    parse_number,
    parse_optional,
    parse_mandatory,
    round2,
)

__all__ = [
    "now_india",
    "epoch_millis",
    "INDIA_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "VendorError",
    "PortfolioConfigError",
    "Presence",
    "parse_number",
    "parse_optional",
    "parse_mandatory",
    "round2",
]
