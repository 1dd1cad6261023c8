"""Static listings served when a provider is in mock mode or unreachable."""

from __future__ import annotations

import copy
from typing import Any

KALSHI_MOCK_MARKETS: list[dict[str, Any]] = [
    {
        "ticker": "KXNFL-CHIEFS-WIN",
        "event_ticker": "KXNFL",
        "title": "Will the Kansas City Chiefs win Super Bowl 2024?",
        "category": "Sports",
        "close_time": "2024-12-31T23:59:59Z",
        "status": "active",
        "yes_bid": 65,
        "yes_ask": 67,
        "no_ask": 35,
        "volume": 150000,
        "open_interest": 50000,
        "liquidity": 20000000,
    },
    {
        "ticker": "KXNBA-LEBRON-RETIRE",
        "event_ticker": "KXNBA",
        "title": "Will LeBron James retire this season?",
        "category": "Sports",
        "close_time": "2024-06-30T23:59:59Z",
        "status": "active",
        "yes_bid": 15,
        "yes_ask": 18,
        "no_ask": 84,
        "volume": 80000,
        "open_interest": 30000,
    },
    {
        "ticker": "KXOSCARS-OPPENHEIMER",
        "event_ticker": "KXOSCARS",
        "title": "Will Oppenheimer win Best Picture at Oscars 2024?",
        "category": "Entertainment",
        "close_time": "2024-03-10T23:59:59Z",
        "status": "closed",
        "yes_bid": 85,
        "yes_ask": 87,
        "volume": 250000,
        "open_interest": 100000,
    },
]

POLYMARKET_MOCK_MARKETS: list[dict[str, Any]] = [
    {
        "id": "poly-taylor-swift-grammys",
        "question": "Will Taylor Swift win Album of the Year at the 2024 Grammys?",
        "description": "Taylor Swift - Album of the Year",
        "slug": "taylor-swift-album-of-the-year",
        "endDate": "2024-02-04T23:59:59Z",
        "active": False,
        "closed": True,
        "volume": "500000",
        "liquidity": "150000",
        "outcomes": ["Yes", "No"],
        "outcomePrices": ["0.75", "0.25"],
    },
    {
        "id": "poly-world-cup-2026",
        "question": "Will the United States host the 2026 FIFA World Cup?",
        "description": "2026 FIFA World Cup Host",
        "slug": "world-cup-2026-host",
        "endDate": "2026-07-19T23:59:59Z",
        "active": True,
        "closed": False,
        "volume": "1200000",
        "liquidity": "400000",
        "outcomes": ["Yes", "No"],
        "outcomePrices": ["0.92", "0.08"],
    },
    {
        "id": "poly-nba-finals-2024",
        "question": "Will the Boston Celtics win the 2024 NBA Finals?",
        "description": "NBA Finals 2024 Winner",
        "slug": "nba-finals-2024",
        "endDate": "2024-06-20T23:59:59Z",
        "active": True,
        "closed": False,
        "volume": "800000",
        "liquidity": "250000",
        "outcomes": ["Yes", "No"],
        "outcomePrices": ["0.45", "0.55"],
    },
]


def kalshi_mock_markets() -> list[dict[str, Any]]:
    return copy.deepcopy(KALSHI_MOCK_MARKETS)


def polymarket_mock_markets() -> list[dict[str, Any]]:
    return copy.deepcopy(POLYMARKET_MOCK_MARKETS)
