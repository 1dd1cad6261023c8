"""Edge - absolute deviation of summed yes/no prices from 1."""

from __future__ import annotations

from predash.models import UnifiedMarket

HIGH_EDGE_THRESHOLD = 0.05


def edge(yes_price: float, no_price: float) -> float:
    """abs((yes + no) - 1) in the 0-1 price convention.

    Rounded to 10 places so that e.g. edge(0.6, 0.6) is exactly 0.2.
    """
    return round(abs((yes_price + no_price) - 1), 10)


def market_edge(market: UnifiedMarket) -> float:
    return edge(market.yes_price, market.no_price)


def is_high_edge(
    market_or_prices: UnifiedMarket | tuple[float, float],
    threshold: float = HIGH_EDGE_THRESHOLD,
) -> bool:
    """True when edge exceeds ``threshold``. Accepts a market or a (yes, no) pair."""
    if isinstance(market_or_prices, UnifiedMarket):
        return market_edge(market_or_prices) > threshold
    yes_price, no_price = market_or_prices
    return edge(yes_price, no_price) > threshold
