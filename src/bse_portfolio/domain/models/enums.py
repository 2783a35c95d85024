"""Enumerations for domain models."""

from enum import Enum


class PriceSource(str, Enum):
    """Where a holding's current price came from."""

    BSE = "bse"
    YAHOO = "yahoo"  # secondary vendor slot, no fetcher wired
    STATIC = "static"
