"""Pydantic schemas for vendor passthrough endpoints."""

from typing import Optional

from pydantic import BaseModel


class PriceResponse(BaseModel):
    """Response schema for a BSE price snapshot."""

    model_config = {"from_attributes": True}

    scripcode: str
    company_name: str
    current_price: float
    previous_close: float
    open: float
    high: float
    low: float
    change: float
    change_percent: float
    last_updated: Optional[str] = None


class FundamentalsSnapshotResponse(BaseModel):
    """Response schema for BSE fundamentals."""

    model_config = {"from_attributes": True}

    scripcode: str
    security_id: str
    isin: str
    sector: str
    industry: str
    face_value: float
    eps: Optional[float] = None
    ceps: Optional[float] = None
    pe: Optional[float] = None
    pb: Optional[float] = None
    roe: Optional[float] = None
    opm: Optional[float] = None
    npm: Optional[float] = None
    group: str
    index: str


class CacheClearedResponse(BaseModel):
    """Response schema for cache invalidation."""

    cache: str
    cleared: bool
