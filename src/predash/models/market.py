"""UnifiedMarket - canonical, provider-agnostic market."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class MarketSource(str, Enum):
    KALSHI = "kalshi"
    POLYMARKET = "polymarket"


class MarketStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    SETTLED = "settled"


class UnifiedMarket(BaseModel):
    """Canonical market - venue-agnostic. Prices are probabilities in [0, 1]."""

    model_config = {"frozen": True}

    id: str = Field(..., min_length=1, description="Source-prefixed id, e.g. kalshi-<ticker>")
    source: MarketSource
    title: str = ""
    description: str | None = None
    category: str | None = None  # sports / entertainment / other
    yes_price: float = Field(..., ge=0, le=1)
    no_price: float = Field(..., ge=0, le=1)
    volume: float | None = Field(None, ge=0)  # None = unknown
    liquidity: float | None = Field(None, ge=0)
    open_interest: float | None = Field(None, ge=0)
    end_date: str | None = None  # ISO-8601
    created_time: str | None = None  # ISO-8601, provider open/start time
    status: MarketStatus | None = None
    tags: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)
    url: str | None = None
    fetched_at: int = 0  # ms epoch, stamped at normalization

    def comparable(self) -> dict[str, Any]:
        """Field values minus the normalization timestamp, for equality checks."""
        return self.model_dump(exclude={"fetched_at"})
