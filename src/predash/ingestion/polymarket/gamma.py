"""Polymarket Gamma API client - market discovery and metadata."""

from __future__ import annotations

from typing import Any

import structlog

from predash.ingestion.base import ProviderClient
from predash.ingestion.mock_data import polymarket_mock_markets
from predash.ingestion.polymarket.normalize import normalize_polymarket_market
from predash.models import MarketSource, UnifiedMarket

log = structlog.get_logger(__name__)

GAMMA_API_BASE = "https://gamma-api.polymarket.com"


def parse_markets(data: Any) -> list[dict[str, Any]]:
    """Gamma returns a bare list; some deployments wrap it as {data: [...]}."""
    if isinstance(data, dict):
        data = data.get("data")
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]


class PolymarketClient(ProviderClient):
    """Gamma REST client. No authentication for market data."""

    source = MarketSource.POLYMARKET

    async def fetch_raw_markets(
        self,
        limit: int = 100,
        offset: int = 0,
        active: bool | None = True,
        tag: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if active is not None:
            params["active"] = "true" if active else "false"
        if tag:
            params["tag"] = tag.lower()
        data = await self._get_json("/markets", params, polymarket_mock_markets)
        markets = parse_markets(data)
        log.debug("polymarket_markets_fetched", count=len(markets))
        return markets

    def normalize_market(self, raw: dict[str, Any]) -> UnifiedMarket:
        return normalize_polymarket_market(raw)
