"""Shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from predash.models import MarketSource, MarketStatus, UnifiedMarket


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


def make_market(**overrides: Any) -> UnifiedMarket:
    fields: dict[str, Any] = {
        "id": "kalshi-TEST",
        "source": MarketSource.KALSHI,
        "title": "Test market",
        "yes_price": 0.5,
        "no_price": 0.5,
        "status": MarketStatus.OPEN,
    }
    fields.update(overrides)
    return UnifiedMarket(**fields)


@pytest.fixture
def dashboard_markets() -> list[UnifiedMarket]:
    return [
        make_market(
            id="kalshi-KXNFL-CHIEFS-WIN",
            title="Will the Kansas City Chiefs win Super Bowl 2024?",
            category="sports",
            yes_price=0.67,
            no_price=0.35,
            volume=150000,
            end_date="2024-12-31T23:59:59Z",
        ),
        make_market(
            id="polymarket-poly-taylor-swift-grammys",
            source=MarketSource.POLYMARKET,
            title="Will Taylor Swift win Album of the Year at the 2024 Grammys?",
            description="Taylor Swift - Album of the Year",
            category="entertainment",
            yes_price=0.75,
            no_price=0.25,
            volume=80000,
            status=MarketStatus.CLOSED,
            created_time="2023-11-10T00:00:00Z",
        ),
        make_market(
            id="kalshi-KXOSCARS-OPPENHEIMER",
            title="Will Oppenheimer win Best Picture at Oscars 2024?",
            category="entertainment",
            yes_price=0.87,
            no_price=0.13,
            volume=250000,
            end_date="2024-03-10T23:59:59Z",
            status=MarketStatus.CLOSED,
        ),
    ]
