"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bse_portfolio.config.settings import get_settings
from bse_portfolio.config.logging_config import setup_logging
from bse_portfolio.api.deps import close_market_provider
from bse_portfolio.api.routers import portfolio_router, bse_router, cache_router
from bse_portfolio.core.exceptions import AppError

logger = logging.getLogger(__name__)

_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "VENDOR_ERROR": 502,
    "PORTFOLIO_CONFIG_ERROR": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    settings = get_settings()
    logger.info(
        "Starting %s (provider=%s, cache_dir=%s)",
        settings.app_name,
        settings.market_data_provider,
        settings.cache_dir,
    )
    yield
    # Shutdown
    close_market_provider()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal BSE portfolio with live prices and fundamentals",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolio_router)
app.include_router(bse_router)
app.include_router(cache_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = _STATUS_BY_CODE.get(exc.code, 400)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
