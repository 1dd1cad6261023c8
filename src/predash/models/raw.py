"""Raw provider records - untrusted, every field optional.

Both providers ship loosely typed JSON: numbers arrive as strings, lists arrive
as JSON-encoded strings, and the same value shows up under alternate names.
Each record keeps the payload as-is and exposes one accessor per unified field
with the lookup precedence written out once.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def first_present(values: list[Any]) -> Any:
    """First value that is not None or an empty string."""
    for v in values:
        if v is None or v == "":
            continue
        return v
    return None


def scalar_id(value: Any) -> Any:
    """Identifier value if it is a string or integer, else None."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return value


class _RawRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    @classmethod
    def from_raw(cls, raw: Any) -> Any:
        """Build a record from a decoded JSON object; anything else gives an empty record."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)


class KalshiMarketRecord(_RawRecord):
    """Kalshi Trade API v2 market. Cent fields are integers 0-100."""

    ticker: Any = None
    market_ticker: Any = None
    event_ticker: Any = None
    title: Any = None
    subtitle: Any = None
    category: Any = None
    status: Any = None
    open_time: Any = None
    close_time: Any = None
    expected_expiration_time: Any = None
    yes_bid: Any = None
    yes_ask: Any = None
    yes_ask_dollars: Any = None
    no_bid: Any = None
    no_ask: Any = None
    no_ask_dollars: Any = None
    last_price: Any = None
    last_price_dollars: Any = None
    volume: Any = None
    open_interest: Any = None
    liquidity: Any = None
    liquidity_pool: Any = None
    tags: Any = None

    # Precedence: (value, is_cents) pairs, first present wins.
    def yes_price_candidates(self) -> list[tuple[Any, bool]]:
        return [
            (self.yes_ask_dollars, False),
            (self.yes_ask, True),
            (self.last_price_dollars, False),
            (self.last_price, True),
        ]

    def no_price_candidates(self) -> list[tuple[Any, bool]]:
        return [(self.no_ask_dollars, False), (self.no_ask, True)]

    def market_id(self) -> Any:
        return first_present([scalar_id(v) for v in (self.ticker, self.market_ticker, self.event_ticker)])

    def end_date(self) -> Any:
        return first_present([self.close_time, self.expected_expiration_time])

    def liquidity_cents(self) -> Any:
        return first_present([self.liquidity, self.liquidity_pool])


class PolymarketMarketRecord(_RawRecord):
    """Polymarket Gamma API market. Numeric fields are often strings."""

    id: Any = None
    condition_id: Any = None
    conditionId: Any = None
    question: Any = None
    title: Any = None
    description: Any = None
    market: Any = None
    slug: Any = None
    category: Any = None
    tags: Any = None
    outcomes: Any = None
    outcomePrices: Any = None
    prices: Any = None
    outcome_prices: Any = None
    volume: Any = None
    volumeNum: Any = None
    liquidity: Any = None
    liquidityNum: Any = None
    startDate: Any = None
    start_date_iso: Any = None
    endDate: Any = None
    end_date_iso: Any = None
    active: Any = None
    closed: Any = None

    def price_list(self) -> Any:
        return first_present([self.outcomePrices, self.prices, self.outcome_prices])

    def market_id(self) -> Any:
        return first_present([scalar_id(v) for v in (self.id, self.condition_id, self.conditionId)])

    def question_text(self) -> Any:
        return first_present([self.question, self.title])

    def description_text(self) -> Any:
        return first_present([self.description, self.market])

    def volume_value(self) -> Any:
        return first_present([self.volume, self.volumeNum])

    def liquidity_value(self) -> Any:
        return first_present([self.liquidity, self.liquidityNum])

    def start_date(self) -> Any:
        return first_present([self.startDate, self.start_date_iso])

    def end_date(self) -> Any:
        return first_present([self.endDate, self.end_date_iso])
