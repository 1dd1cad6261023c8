"""Abstract provider client: live fetch with static mock fallback."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

import httpx
import structlog

from predash.models import MarketSource, ProviderConfig, UnifiedMarket

log = structlog.get_logger(__name__)


class ProviderClient(ABC):
    """One provider's read endpoints. Implement for each venue.

    Every call is either Live (HTTP) or Fallback (static mock records), chosen
    per call: mock mode skips the network, and a transport failure falls back
    once. Transport errors never escape ``fetch_*`` methods.
    """

    source: MarketSource

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url.rstrip("/"),
                timeout=self.config.timeout_sec,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ProviderClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any],
        fallback: Callable[[], Any],
    ) -> Any:
        """GET path and decode JSON; on mock mode or failure return fallback()."""
        if self.config.use_mock:
            return fallback()
        try:
            resp = await self._get_client().get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning(
                "provider_fetch_failed",
                source=self.source.value,
                path=path,
                error=str(e),
                fallback="mock" if self.config.mock_fallback else "empty",
            )
            if self.config.mock_fallback:
                return fallback()
            return None

    @abstractmethod
    async def fetch_raw_markets(self, **params: Any) -> list[dict[str, Any]]:
        """Return raw provider market records."""
        ...

    @abstractmethod
    def normalize_market(self, raw: dict[str, Any]) -> UnifiedMarket:
        ...

    async def fetch_markets(self, **params: Any) -> list[UnifiedMarket]:
        """Fetch and normalize markets."""
        raw = await self.fetch_raw_markets(**params)
        return [self.normalize_market(r) for r in raw]
