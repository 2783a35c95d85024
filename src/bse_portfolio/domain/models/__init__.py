"""Domain models package."""

from bse_portfolio.domain.models.enums import PriceSource
from bse_portfolio.domain.models.holding import (
    FixedAttributes,
    RealtimeData,
    Fundamentals,
    Holding,
    EnrichedHolding,
)

__all__ = [
    "PriceSource",
    "FixedAttributes",
    "RealtimeData",
    "Fundamentals",
    "Holding",
    "EnrichedHolding",
]
