"""Kalshi REST market -> canonical UnifiedMarket.

Field precedence (first present wins):
  yes_price  yes_ask_dollars, yes_ask (cents), last_price_dollars, last_price (cents); else 0.5
  no_price   no_ask_dollars, no_ask (cents); else 1 - yes_price
  id         "kalshi-" + ticker | market_ticker | event_ticker
  end_date   close_time | expected_expiration_time
A zero quote means no resting order and counts as absent.
"""

from __future__ import annotations

import time
from typing import Any

from predash.ingestion.parsing import (
    bucket_category,
    clamp_price,
    non_negative,
    to_float,
    to_str,
    to_str_list,
)
from predash.models import KalshiMarketRecord, MarketSource, MarketStatus, UnifiedMarket
from predash.models.raw import scalar_id

ID_PREFIX = "kalshi-"
DEFAULT_PRICE = 0.5
# Contain "active"/"open" as substrings but are not tradeable.
_NOT_YET_OR_NO_LONGER_OPEN = frozenset({"inactive", "unopened"})


def _price(candidates: list[tuple[Any, bool]]) -> float | None:
    for value, is_cents in candidates:
        p = to_float(value)
        if p is None or p <= 0:
            continue
        return clamp_price(p / 100 if is_cents else p)
    return None


def map_status(raw: Any) -> MarketStatus | None:
    s = to_str(raw)
    if s is None:
        return None
    lower = s.lower()
    if lower in _NOT_YET_OR_NO_LONGER_OPEN:
        return MarketStatus.CLOSED
    if "active" in lower or "open" in lower:
        return MarketStatus.OPEN
    if "closed" in lower:
        return MarketStatus.CLOSED
    return MarketStatus.SETTLED


def normalize_kalshi_market(raw: dict[str, Any] | KalshiMarketRecord) -> UnifiedMarket:
    """Convert a Kalshi market object to canonical UnifiedMarket. Never raises."""
    rec = KalshiMarketRecord.from_raw(raw)
    yes_price = _price(rec.yes_price_candidates())
    if yes_price is None:
        yes_price = DEFAULT_PRICE
    no_price = _price(rec.no_price_candidates())
    if no_price is None:
        no_price = clamp_price(1 - yes_price)
    ticker = to_str(rec.market_id())
    event_ticker = to_str(scalar_id(rec.event_ticker))
    liquidity_cents = to_float(rec.liquidity_cents())
    url = None
    if event_ticker and ticker and ticker != event_ticker:
        url = f"https://kalshi.com/markets/{event_ticker}/{ticker}"
    return UnifiedMarket(
        id=ID_PREFIX + (ticker or "unknown"),
        source=MarketSource.KALSHI,
        title=to_str(rec.title) or "",
        description=to_str(rec.subtitle),
        category=bucket_category(rec.category),
        yes_price=yes_price,
        no_price=no_price,
        volume=non_negative(to_float(rec.volume)),
        liquidity=non_negative(liquidity_cents / 100 if liquidity_cents is not None else None),
        open_interest=non_negative(to_float(rec.open_interest)),
        end_date=to_str(rec.end_date()),
        created_time=to_str(rec.open_time),
        status=map_status(rec.status),
        tags=to_str_list(rec.tags),
        url=url,
        fetched_at=int(time.time() * 1000),
    )
