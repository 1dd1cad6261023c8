"""FastAPI backend for the web dashboard."""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from functools import partial
from typing import Callable

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from predash.api.schemas import (
    ErrorResponse,
    HealthResponse,
    MarketListItem,
    MarketsListResponse,
)
from predash.config import Settings, get_settings
from predash.dashboard.filters import MarketFilters, MarketSort, SortDirection, SortField, filter_and_sort
from predash.ingestion.aggregator import AggregationResult, MarketAggregator
from predash.models import UnifiedMarket

log = structlog.get_logger(__name__)


def _error_json(code: str, message: str, status_code: int = 404) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


class MarketCache:
    """Last fetch cycle's result, refetched once it is older than ``stale_sec``."""

    def __init__(self, aggregator: MarketAggregator, stale_sec: float) -> None:
        self.aggregator = aggregator
        self.stale_sec = stale_sec
        self._result: AggregationResult | None = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    def _fresh(self) -> bool:
        return self._result is not None and time.monotonic() - self._fetched_at < self.stale_sec

    async def get(self) -> AggregationResult:
        async with self._lock:
            if not self._fresh():
                self._result = await self.aggregator.get_unified_markets()
                self._fetched_at = time.monotonic()
            else:
                log.debug("markets_cache_hit", age_sec=round(time.monotonic() - self._fetched_at, 1))
            return self._result

    async def get_market(self, market_id: str) -> UnifiedMarket | None:
        result = await self.get()
        for m in result.markets:
            if m.id == market_id:
                return m
        return None


def create_app(
    aggregator_factory: Callable[[], MarketAggregator] | None = None,
    settings: Settings | None = None,
    stale_sec: float | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    if aggregator_factory is None:
        aggregator_factory = partial(MarketAggregator.from_settings, settings)
    if stale_sec is None:
        stale_sec = settings.stale_sec

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        aggregator = aggregator_factory()
        app.state.aggregator = aggregator
        app.state.markets = MarketCache(aggregator, stale_sec)
        yield
        await aggregator.close()

    app = FastAPI(title="PreDash API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/markets", response_model=MarketsListResponse)
    async def markets_list(
        request: Request,
        source: str = "all",
        category: str = "all",
        status: str = "all",
        search: str = "",
        min_volume: float | None = Query(None, ge=0),
        max_price: float | None = Query(None, ge=0, le=1),
        sort: SortField = "volume",
        direction: SortDirection = "desc",
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
    ) -> MarketsListResponse:
        """Cached fetch cycle, then filter, sort and paginate."""
        result = await request.app.state.markets.get()
        filters = MarketFilters(
            source=source,
            category=category,
            status=status,
            search=search,
            min_volume=min_volume,
            max_price=max_price,
        )
        ordered = filter_and_sort(result.markets, filters, MarketSort(field=sort, direction=direction))
        page = ordered[offset : offset + limit]
        return MarketsListResponse(
            markets=[MarketListItem.from_market(m) for m in page],
            total=len(ordered),
            errors=result.errors,
        )

    @app.get(
        "/markets/{market_id}",
        response_model=MarketListItem,
        responses={404: {"model": ErrorResponse}},
    )
    async def market_detail(request: Request, market_id: str):
        market = await request.app.state.markets.get_market(market_id)
        if market is None:
            return _error_json("not_found", f"Market {market_id} not found")
        return MarketListItem.from_market(market)

    return app


def run_api(settings: Settings, host: str = "127.0.0.1", port: int = 8000) -> None:
    import uvicorn

    log.info("api_starting", host=host, port=port)
    uvicorn.run(create_app(settings=settings), host=host, port=port, reload=False)
