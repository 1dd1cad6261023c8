"""Fan-out/fan-in over both provider clients."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import structlog

from predash.ingestion.base import ProviderClient
from predash.ingestion.kalshi.client import KalshiClient
from predash.ingestion.polymarket.gamma import PolymarketClient
from predash.models import MarketSource, UnifiedMarket

log = structlog.get_logger(__name__)

DEFAULT_PROVIDER_TIMEOUT_SEC = 10.0


@dataclass
class AggregationResult:
    """Markets from every provider that answered, plus per-source error messages."""

    markets: list[UnifiedMarket] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _dedupe(markets: list[UnifiedMarket]) -> list[UnifiedMarket]:
    """Keep the first market per id. Rows without a usable id collapse onto "<source>-unknown"."""
    seen: set[str] = set()
    out = []
    dropped = []
    for m in markets:
        if m.id in seen:
            dropped.append(m.id)
            continue
        seen.add(m.id)
        out.append(m)
    if dropped:
        log.warning("duplicate_markets_dropped", count=len(dropped), market_ids=sorted(set(dropped)))
    return out


class MarketAggregator:
    """Runs every provider client concurrently and concatenates in declaration order.

    A client that raises or exceeds ``timeout_sec`` contributes no markets; the
    other providers' results are still returned. The same real-world event
    listed by both providers appears twice.
    """

    def __init__(
        self,
        clients: list[ProviderClient],
        timeout_sec: float = DEFAULT_PROVIDER_TIMEOUT_SEC,
        fetch_params: dict[MarketSource, dict[str, Any]] | None = None,
    ) -> None:
        self.clients = clients
        self.timeout_sec = timeout_sec
        self.fetch_params = fetch_params or {}

    @classmethod
    def from_settings(cls, settings: Any) -> MarketAggregator:
        limit = settings.fetch_limit
        return cls(
            [KalshiClient(settings.kalshi_config), PolymarketClient(settings.polymarket_config)],
            timeout_sec=settings.provider_timeout_sec,
            fetch_params={
                MarketSource.KALSHI: {"limit": limit},
                MarketSource.POLYMARKET: {"limit": limit},
            },
        )

    async def _fetch_one(self, client: ProviderClient) -> list[UnifiedMarket]:
        params = self.fetch_params.get(client.source, {})
        markets = await asyncio.wait_for(client.fetch_markets(**params), timeout=self.timeout_sec)
        return _dedupe(markets)

    async def _gather(self, clients: list[ProviderClient]) -> AggregationResult:
        outcomes = await asyncio.gather(
            *(self._fetch_one(c) for c in clients), return_exceptions=True
        )
        result = AggregationResult()
        for client, outcome in zip(clients, outcomes):
            source = client.source.value
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.TimeoutError):
                    message = f"timed out after {self.timeout_sec:.0f}s"
                else:
                    message = str(outcome) or type(outcome).__name__
                log.warning("provider_failed", source=source, error=message)
                result.errors[source] = message
                continue
            result.markets.extend(outcome)
        log.info("markets_aggregated", total=len(result.markets), failed=sorted(result.errors))
        return result

    async def get_unified_markets(self) -> AggregationResult:
        """One fetch cycle over all providers."""
        return await self._gather(self.clients)

    async def get_markets_by_source(self, source: MarketSource | str) -> AggregationResult:
        source = MarketSource(source)
        return await self._gather([c for c in self.clients if c.source == source])

    async def get_market_by_id(self, market_id: str) -> UnifiedMarket | None:
        """Look up one market; the id prefix selects the provider."""
        for source in MarketSource:
            if market_id.startswith(f"{source.value}-"):
                result = await self.get_markets_by_source(source)
                break
        else:
            return None
        for m in result.markets:
            if m.id == market_id:
                return m
        return None

    async def close(self) -> None:
        for c in self.clients:
            await c.close()

    async def __aenter__(self) -> MarketAggregator:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
