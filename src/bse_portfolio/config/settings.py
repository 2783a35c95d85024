"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_portfolio_file() -> Path:
    """Return the portfolio document shipped with the package."""
    return Path(__file__).resolve().parent.parent / "data" / "portfolio.json"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "BSE Portfolio Dashboard"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Static holdings (packaged sample if not set)
    portfolio_file: Optional[Path] = None

    # Flat JSON cache documents live here
    cache_dir: Path = Path(".cache")

    # Cache lifetimes
    price_cache_ttl_seconds: int = 120
    fundamentals_cache_ttl_seconds: int = 24 * 60 * 60

    # Vendor rate limiting
    fetch_batch_size: int = 10
    fetch_batch_delay_seconds: float = 1.0

    # "bse" for the live vendor, "stub" for offline deterministic data
    market_data_provider: str = "bse"

    # None keeps the HTTP client's default (no timeout)
    http_timeout_seconds: Optional[float] = None

    # Vendor endpoints
    bse_api_base_url: str = "https://api.bseindia.com/BseIndiaAPI/api"
    bse_search_url: str = "https://api.bseindia.com/Msource/1D/getQouteSearch.aspx"

    def get_portfolio_file(self) -> Path:
        """Get the static portfolio document path."""
        return self.portfolio_file or get_default_portfolio_file()

    # Paths only; the cache stores create the directory when they first write
    def get_scripcode_cache_path(self) -> Path:
        return self.cache_dir / "scripcode-mapping.json"

    def get_price_cache_path(self) -> Path:
        return self.cache_dir / "price-cache.json"

    def get_fundamentals_cache_path(self) -> Path:
        return self.cache_dir / "fundamentals-cache.json"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and embedding callers)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
