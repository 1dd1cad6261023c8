"""Filter/sort engine over unified markets."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Literal

from pydantic import BaseModel

from predash.dashboard.edge import market_edge
from predash.models import UnifiedMarket

ALL = "all"

SortField = Literal["volume", "price", "closeTime", "createdTime", "edge"]
SortDirection = Literal["asc", "desc"]


class MarketFilters(BaseModel):
    """AND-combined predicates. "all", "" and None disable a predicate."""

    model_config = {"frozen": True}

    source: str = ALL
    category: str = ALL
    status: str = ALL
    search: str = ""
    min_volume: float | None = None
    max_price: float | None = None


class MarketSort(BaseModel):
    model_config = {"frozen": True}

    field: SortField = "volume"
    direction: SortDirection = "desc"


def _enabled(value: str | None) -> bool:
    return bool(value) and value != ALL


def _value(v: Any) -> Any:
    return getattr(v, "value", v)


def filter_markets(markets: list[UnifiedMarket], filters: MarketFilters | None = None) -> list[UnifiedMarket]:
    """Return a new list of markets matching every enabled predicate, input order kept."""
    if filters is None:
        return list(markets)
    predicates: list[Callable[[UnifiedMarket], bool]] = []
    if _enabled(filters.source):
        predicates.append(lambda m: _value(m.source) == filters.source)
    if _enabled(filters.category):
        predicates.append(lambda m: m.category == filters.category)
    if _enabled(filters.status):
        predicates.append(lambda m: _value(m.status) == filters.status)
    if filters.search:
        needle = filters.search.lower()
        predicates.append(lambda m: needle in f"{m.title} {m.description or ''}".lower())
    if filters.min_volume is not None:
        predicates.append(lambda m: m.volume is not None and m.volume >= filters.min_volume)
    if filters.max_price is not None:
        predicates.append(lambda m: m.yes_price <= filters.max_price)
    return [m for m in markets if all(p(m) for p in predicates)]


def _timestamp(value: str | None) -> float | None:
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


_SORT_KEYS: dict[str, Callable[[UnifiedMarket], float | None]] = {
    "volume": lambda m: m.volume,
    "price": lambda m: m.yes_price,
    "closeTime": lambda m: _timestamp(m.end_date),
    "createdTime": lambda m: _timestamp(m.created_time),
    "edge": market_edge,
}


def sort_markets(markets: list[UnifiedMarket], sort: MarketSort | None = None) -> list[UnifiedMarket]:
    """Stable single-key sort. Markets missing the key go last in either direction."""
    sort = sort or MarketSort()
    key = _SORT_KEYS[sort.field]
    present: list[tuple[float, UnifiedMarket]] = []
    missing: list[UnifiedMarket] = []
    for m in markets:
        k = key(m)
        if k is None:
            missing.append(m)
        else:
            present.append((k, m))
    ordered = sorted(present, key=lambda pair: pair[0], reverse=sort.direction == "desc")
    return [m for _, m in ordered] + missing


def filter_and_sort(
    markets: list[UnifiedMarket],
    filters: MarketFilters | None = None,
    sort: MarketSort | None = None,
) -> list[UnifiedMarket]:
    return sort_markets(filter_markets(markets, filters), sort)


apply = filter_and_sort
