"""Dashboard JSON API tests against mock-mode providers."""

import httpx
import pytest
from fastapi.testclient import TestClient

from predash.api.main import create_app
from predash.config import Settings
from predash.ingestion.aggregator import MarketAggregator
from predash.ingestion.kalshi.client import KalshiClient
from predash.ingestion.polymarket.gamma import PolymarketClient
from predash.models import ProviderConfig

MOCK_SETTINGS = Settings.from_dict({"kalshi": {"use_mock": True}, "polymarket": {"use_mock": True}})


@pytest.fixture
def client():
    app = create_app(lambda: MarketAggregator.from_settings(MOCK_SETTINGS))
    with TestClient(app) as c:
        yield c


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_markets_default_sort_volume_desc(client):
    data = client.get("/markets").json()
    assert data["total"] == 6
    assert data["errors"] == {}
    volumes = [m["volume"] for m in data["markets"]]
    assert volumes == sorted(volumes, reverse=True)
    assert all("edge" in m and "high_edge" in m for m in data["markets"])


def test_markets_filters(client):
    data = client.get("/markets", params={"source": "kalshi", "status": "open"}).json()
    assert [m["id"] for m in data["markets"]] == ["kalshi-KXNFL-CHIEFS-WIN", "kalshi-KXNBA-LEBRON-RETIRE"]
    data = client.get("/markets", params={"search": "CHIEFS"}).json()
    assert [m["id"] for m in data["markets"]] == ["kalshi-KXNFL-CHIEFS-WIN"]


def test_markets_sort_and_paginate(client):
    data = client.get("/markets", params={"sort": "closeTime", "direction": "asc", "limit": 2, "offset": 1}).json()
    assert data["total"] == 6
    assert [m["id"] for m in data["markets"]] == [
        "kalshi-KXOSCARS-OPPENHEIMER",
        "polymarket-poly-nba-finals-2024",
    ]


def test_markets_rejects_unknown_sort(client):
    assert client.get("/markets", params={"sort": "title"}).status_code == 422


def test_market_detail_and_not_found(client):
    data = client.get("/markets/polymarket-poly-world-cup-2026").json()
    assert data["yes_price"] == 0.92
    assert data["edge"] == 0.0
    resp = client.get("/markets/kalshi-NOPE")
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


def _counting_app(calls, stale_sec):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.host)
        if request.url.host == "kalshi.test":
            return httpx.Response(200, json={"markets": [{"ticker": "A", "title": "Alpha", "yes_ask": 40}]})
        return httpx.Response(200, json=[{"id": "p1", "question": "Beta?", "outcomePrices": ["0.3", "0.7"]}])

    transport = httpx.MockTransport(handler)

    def factory():
        return MarketAggregator(
            [
                KalshiClient(ProviderConfig(base_url="https://kalshi.test"), transport=transport),
                PolymarketClient(ProviderConfig(base_url="https://gamma.test"), transport=transport),
            ]
        )

    return create_app(factory, settings=MOCK_SETTINGS, stale_sec=stale_sec)


def test_requests_within_staleness_window_share_one_fetch():
    calls = []
    with TestClient(_counting_app(calls, stale_sec=60)) as client:
        assert client.get("/markets").json()["total"] == 2
        assert client.get("/markets", params={"search": "x"}).json()["total"] == 0
        assert client.get("/markets/kalshi-A").json()["yes_price"] == pytest.approx(0.4)
        assert client.get("/markets/kalshi-NOPE").status_code == 404
    assert sorted(calls) == ["gamma.test", "kalshi.test"]


def test_stale_results_are_refetched():
    calls = []
    with TestClient(_counting_app(calls, stale_sec=0)) as client:
        client.get("/markets")
        client.get("/markets/polymarket-p1")
    assert len(calls) == 4
