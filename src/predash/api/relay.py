"""Dev relay: same-origin GET forwarding to the providers' public listing endpoints.

Query parameters are forwarded verbatim and the upstream JSON body is returned
unmodified. Any upstream failure becomes a 500 with a fixed message; the
upstream status and body are not propagated.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from predash.api.schemas import RelayErrorResponse
from predash.config import Settings, get_settings

log = structlog.get_logger(__name__)

RELAY_TIMEOUT_SEC = 10.0


def _error_json(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def create_relay_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    kalshi_base = settings.kalshi_api_base.rstrip("/")
    gamma_base = settings.gamma_api_base.rstrip("/")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One upstream client per app; closed (with its transport) at shutdown.
        app.state.http = httpx.AsyncClient(timeout=RELAY_TIMEOUT_SEC, transport=transport)
        yield
        await app.state.http.aclose()

    app = FastAPI(title="PreDash Relay", version="0.1.0", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"], allow_headers=["*"])

    async def forward(url: str, params: dict[str, Any], failure: str) -> Response:
        try:
            resp = await app.state.http.get(url, params=params)
            resp.raise_for_status()
            resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.error("relay_upstream_failed", url=url, error=str(e))
            return _error_json(failure)
        return Response(content=resp.content, media_type="application/json")

    responses = {500: {"model": RelayErrorResponse}}

    @app.get("/api/kalshi/markets", responses=responses)
    async def kalshi_markets(limit: str = "100", cursor: str | None = None, status: str = "open") -> Response:
        params: dict[str, Any] = {"limit": limit, "status": status}
        if cursor:
            params["cursor"] = cursor
        return await forward(f"{kalshi_base}/markets", params, "Failed to fetch Kalshi markets")

    @app.get("/api/kalshi/events", responses=responses)
    async def kalshi_events(limit: str = "100") -> Response:
        return await forward(f"{kalshi_base}/events", {"limit": limit}, "Failed to fetch Kalshi events")

    @app.get("/api/polymarket/markets", responses=responses)
    async def polymarket_markets(
        limit: str = "100",
        offset: str = "0",
        tag: str | None = None,
        active: str = "true",
    ) -> Response:
        params: dict[str, Any] = {"limit": limit, "offset": offset, "active": active}
        if tag:
            params["tag"] = tag
        return await forward(f"{gamma_base}/markets", params, "Failed to fetch Polymarket markets")

    return app


def run_relay(settings: Settings, host: str = "127.0.0.1", port: int = 3001) -> None:
    import uvicorn

    app = create_relay_app(settings)
    log.info("relay_starting", host=host, port=port)
    uvicorn.run(app, host=host, port=port, reload=False)
