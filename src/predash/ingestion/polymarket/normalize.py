"""Polymarket Gamma market -> canonical UnifiedMarket.

Field precedence (first present wins):
  prices       outcomePrices | prices | outcome_prices (list or JSON string)
  yes_price    float(prices[0]); else 0.5
  no_price     float(prices[1]); else 1 - yes_price
  id           "polymarket-" + id | condition_id | conditionId
  volume       volume | volumeNum; unparsable -> 0.0
  liquidity    liquidity | liquidityNum; unparsable -> 0.0
  end_date     endDate | end_date_iso
  created_time startDate | start_date_iso
"""

from __future__ import annotations

import time
from typing import Any

from predash.ingestion.parsing import (
    bucket_category,
    clamp_price,
    guess_category,
    to_bool,
    to_float,
    to_str,
    to_str_list,
)
from predash.models import MarketSource, MarketStatus, PolymarketMarketRecord, UnifiedMarket

ID_PREFIX = "polymarket-"
DEFAULT_PRICE = 0.5
DEFAULT_OUTCOMES = ["Yes", "No"]


def _prices(value: Any) -> tuple[float | None, float | None]:
    if isinstance(value, list):
        items = value
    else:
        items = to_str_list(value)
    yes = to_float(items[0]) if len(items) > 0 else None
    no = to_float(items[1]) if len(items) > 1 else None
    return yes, no


def _amount(value: Any) -> float:
    f = to_float(value)
    if f is None or f < 0:
        return 0.0
    return f


def map_status(closed: Any, active: Any) -> MarketStatus:
    if to_bool(closed):
        return MarketStatus.CLOSED
    if to_bool(active, default=True):
        return MarketStatus.OPEN
    return MarketStatus.SETTLED


def normalize_polymarket_market(raw: dict[str, Any] | PolymarketMarketRecord) -> UnifiedMarket:
    """Convert a Gamma API market object to canonical UnifiedMarket. Never raises."""
    rec = PolymarketMarketRecord.from_raw(raw)
    yes, no = _prices(rec.price_list())
    yes_price = clamp_price(yes) if yes is not None else DEFAULT_PRICE
    no_price = clamp_price(no) if no is not None else clamp_price(1 - yes_price)

    title = to_str(rec.question_text()) or ""
    description = to_str(rec.description_text())
    tags = to_str_list(rec.tags)
    category = bucket_category(rec.category)
    if category is None:
        category = guess_category(" ".join([title, description or "", *tags]))

    slug = to_str(rec.slug)
    return UnifiedMarket(
        id=ID_PREFIX + (to_str(rec.market_id()) or "unknown"),
        source=MarketSource.POLYMARKET,
        title=title,
        description=description,
        category=category,
        yes_price=yes_price,
        no_price=no_price,
        volume=_amount(rec.volume_value()),
        liquidity=_amount(rec.liquidity_value()),
        end_date=to_str(rec.end_date()),
        created_time=to_str(rec.start_date()),
        status=map_status(rec.closed, rec.active),
        tags=tags,
        outcomes=to_str_list(rec.outcomes) or list(DEFAULT_OUTCOMES),
        url=f"https://polymarket.com/event/{slug}" if slug else None,
        fetched_at=int(time.time() * 1000),
    )
