"""Vendor snapshots: what one price or fundamentals call returns."""

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional


def _known_fields(cls, data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass(frozen=True)
class PriceSnapshot:
    """Current price and day range for one scrip code."""

    scripcode: str
    company_name: str
    current_price: float
    previous_close: float = 0.0
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    change: float = 0.0
    change_percent: float = 0.0
    last_updated: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PriceSnapshot":
        """Rebuild from a cached document entry. Raises TypeError on missing fields."""
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class FundamentalsSnapshot:
    """Valuation ratios and classification for one scrip code."""

    scripcode: str
    security_id: str = ""
    isin: str = ""
    sector: str = ""
    industry: str = ""
    face_value: float = 0.0
    eps: Optional[float] = None
    ceps: Optional[float] = None
    pe: Optional[float] = None
    pb: Optional[float] = None
    roe: Optional[float] = None
    opm: Optional[float] = None
    npm: Optional[float] = None
    group: str = ""
    index: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FundamentalsSnapshot":
        """Rebuild from a cached document entry. Raises TypeError on missing fields."""
        return cls(**_known_fields(cls, data))
