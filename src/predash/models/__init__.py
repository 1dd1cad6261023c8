"""Canonical schema (Pydantic) - UnifiedMarket, raw provider records, config."""

from predash.models.config import ProviderConfig
from predash.models.market import MarketSource, MarketStatus, UnifiedMarket
from predash.models.raw import KalshiMarketRecord, PolymarketMarketRecord

__all__ = [
    "UnifiedMarket",
    "MarketSource",
    "MarketStatus",
    "KalshiMarketRecord",
    "PolymarketMarketRecord",
    "ProviderConfig",
]
