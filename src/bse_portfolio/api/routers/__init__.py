"""API routers package."""

from bse_portfolio.api.routers.portfolio import router as portfolio_router
from bse_portfolio.api.routers.bse import router as bse_router
from bse_portfolio.api.routers.cache import router as cache_router

__all__ = [
    "portfolio_router",
    "bse_router",
    "cache_router",
]
