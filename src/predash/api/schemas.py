"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from predash.dashboard.edge import is_high_edge, market_edge
from predash.models import UnifiedMarket


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. not_found")


class RelayErrorResponse(BaseModel):
    error: str


# --- Markets ---
class MarketListItem(UnifiedMarket):
    edge: float = Field(..., description="abs(yes + no - 1)")
    high_edge: bool = False

    @classmethod
    def from_market(cls, market: UnifiedMarket) -> MarketListItem:
        return cls(
            **market.model_dump(),
            edge=market_edge(market),
            high_edge=is_high_edge(market),
        )


class MarketsListResponse(BaseModel):
    markets: list[MarketListItem]
    total: int
    errors: dict[str, str] = Field(default_factory=dict, description="Providers that failed, by source")
