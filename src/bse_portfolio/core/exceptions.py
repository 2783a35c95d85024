"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class VendorError(AppError):
    """Raised when the market-data vendor rejects a request or returns nothing usable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="VENDOR_ERROR")


class PortfolioConfigError(AppError):
    """Raised when the static portfolio document cannot be loaded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load portfolio from {path}: {reason}", code="PORTFOLIO_CONFIG_ERROR")
