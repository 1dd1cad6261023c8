"""Kalshi Trade API v2 client - read-only market discovery."""

from __future__ import annotations

from typing import Any

import structlog

from predash.ingestion.base import ProviderClient
from predash.ingestion.kalshi.normalize import normalize_kalshi_market
from predash.ingestion.mock_data import kalshi_mock_markets
from predash.models import MarketSource, UnifiedMarket

log = structlog.get_logger(__name__)

KALSHI_API_BASE = "https://api.elections.kalshi.com/trade-api/v2"


def _records(data: Any, key: str) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    rows = data.get(key) or []
    if not isinstance(rows, list):
        return []
    return [r for r in rows if isinstance(r, dict)]


class KalshiClient(ProviderClient):
    """Kalshi REST client. Public market data; api_key is sent as a bearer token if set."""

    source = MarketSource.KALSHI

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def fetch_raw_markets(
        self,
        limit: int = 100,
        cursor: str | None = None,
        status: str | None = "open",
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": limit}
        if status:
            params["status"] = status
        if cursor:
            params["cursor"] = cursor
        data = await self._get_json("/markets", params, lambda: {"markets": kalshi_mock_markets()})
        markets = _records(data, "markets")
        log.debug("kalshi_markets_fetched", count=len(markets))
        return markets

    async def fetch_raw_events(self, limit: int = 100) -> list[dict[str, Any]]:
        """Events group related markets; no mock events exist, so fallback is empty."""
        data = await self._get_json("/events", {"limit": limit}, lambda: {"events": []})
        return _records(data, "events")

    def normalize_market(self, raw: dict[str, Any]) -> UnifiedMarket:
        return normalize_kalshi_market(raw)
