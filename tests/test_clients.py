"""Provider client tests: live fetch via MockTransport, mock mode, fallback."""

import httpx
import pytest

from predash.ingestion.kalshi.client import KalshiClient
from predash.ingestion.mock_data import KALSHI_MOCK_MARKETS, POLYMARKET_MOCK_MARKETS
from predash.ingestion.polymarket.gamma import PolymarketClient, parse_markets
from predash.models import MarketSource, ProviderConfig

KALSHI_BASE = "https://kalshi.test/trade-api/v2"
GAMMA_BASE = "https://gamma.test"


def _config(base_url, **kwargs):
    return ProviderConfig(base_url=base_url, **kwargs)


def _failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.mark.anyio
async def test_kalshi_fetch_markets_live():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={"cursor": "next", "markets": [{"ticker": "KX-1", "title": "One", "yes_ask": 55}, "junk"]},
        )

    client = KalshiClient(_config(KALSHI_BASE, api_key="secret"), transport=httpx.MockTransport(handler))
    async with client:
        markets = await client.fetch_markets(limit=5, cursor="abc")
    assert [m.id for m in markets] == ["kalshi-KX-1"]
    assert markets[0].yes_price == pytest.approx(0.55)
    assert seen["url"].startswith(f"{KALSHI_BASE}/markets?")
    assert "limit=5" in seen["url"] and "cursor=abc" in seen["url"] and "status=open" in seen["url"]
    assert seen["auth"] == "Bearer secret"


@pytest.mark.anyio
async def test_kalshi_no_auth_header_without_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"markets": []})

    async with KalshiClient(_config(KALSHI_BASE), transport=httpx.MockTransport(handler)) as client:
        assert await client.fetch_raw_markets() == []
    assert seen["auth"] is None


@pytest.mark.anyio
async def test_kalshi_mock_mode_skips_network():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("network used in mock mode")

    async with KalshiClient(_config(KALSHI_BASE, use_mock=True), transport=httpx.MockTransport(handler)) as client:
        markets = await client.fetch_markets()
    assert len(markets) == len(KALSHI_MOCK_MARKETS)
    assert all(m.source == MarketSource.KALSHI for m in markets)


@pytest.mark.anyio
async def test_kalshi_falls_back_to_mock_on_transport_error():
    async with KalshiClient(_config(KALSHI_BASE), transport=_failing_transport()) as client:
        markets = await client.fetch_markets()
    assert [m.id for m in markets] == [f"kalshi-{r['ticker']}" for r in KALSHI_MOCK_MARKETS]


@pytest.mark.anyio
async def test_kalshi_empty_on_failure_without_fallback():
    async with KalshiClient(_config(KALSHI_BASE, mock_fallback=False), transport=_failing_transport()) as client:
        assert await client.fetch_markets() == []
        assert await client.fetch_raw_events() == []


@pytest.mark.anyio
async def test_kalshi_http_error_status_falls_back():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
    async with KalshiClient(_config(KALSHI_BASE), transport=transport) as client:
        markets = await client.fetch_markets()
    assert len(markets) == len(KALSHI_MOCK_MARKETS)


@pytest.mark.anyio
async def test_kalshi_events():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/events")
        return httpx.Response(200, json={"events": [{"event_ticker": "KXNFL", "title": "NFL"}]})

    async with KalshiClient(_config(KALSHI_BASE), transport=httpx.MockTransport(handler)) as client:
        events = await client.fetch_raw_events(limit=10)
    assert events == [{"event_ticker": "KXNFL", "title": "NFL"}]


@pytest.mark.anyio
async def test_polymarket_fetch_markets_live():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"id": "p1", "question": "Q?", "outcomePrices": '["0.2", "0.8"]'}])

    async with PolymarketClient(_config(GAMMA_BASE), transport=httpx.MockTransport(handler)) as client:
        markets = await client.fetch_markets(limit=10, offset=20, tag="Sports")
    assert seen["params"] == {"limit": "10", "offset": "20", "active": "true", "tag": "sports"}
    assert [m.id for m in markets] == ["polymarket-p1"]
    assert markets[0].yes_price == 0.2


@pytest.mark.anyio
async def test_polymarket_non_json_body_falls_back():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    async with PolymarketClient(_config(GAMMA_BASE), transport=transport) as client:
        markets = await client.fetch_markets()
    assert len(markets) == len(POLYMARKET_MOCK_MARKETS)


def test_parse_markets_accepts_wrapped_and_bare_bodies():
    assert parse_markets([{"id": "a"}, 3]) == [{"id": "a"}]
    assert parse_markets({"data": [{"id": "b"}], "next_cursor": "x"}) == [{"id": "b"}]
    assert parse_markets({"error": "x"}) == []
    assert parse_markets(None) == []
