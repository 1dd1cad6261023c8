"""Client-side views over unified markets: filter/sort, edge, display formatting."""

from predash.dashboard.edge import HIGH_EDGE_THRESHOLD, edge, is_high_edge, market_edge
from predash.dashboard.filters import (
    MarketFilters,
    MarketSort,
    apply,
    filter_and_sort,
    filter_markets,
    sort_markets,
)

__all__ = [
    "HIGH_EDGE_THRESHOLD",
    "MarketFilters",
    "MarketSort",
    "apply",
    "edge",
    "filter_and_sort",
    "filter_markets",
    "is_high_edge",
    "market_edge",
    "sort_markets",
]
