"""Display formatting for prices, volumes and dates."""

from __future__ import annotations

from datetime import datetime

NOT_AVAILABLE = "N/A"


def format_price(price: float) -> str:
    """0.675 -> '67.5%'."""
    return f"{price * 100:.1f}%"


def format_volume(volume: float | None) -> str:
    """Dollar amount with K/M suffix; unknown or zero -> N/A."""
    if not volume:
        return NOT_AVAILABLE
    if volume >= 1_000_000:
        return f"${volume / 1_000_000:.2f}M"
    if volume >= 1_000:
        return f"${volume / 1_000:.1f}K"
    return f"${volume:.0f}"


def format_date(value: str | None) -> str:
    """ISO-8601 -> 'Dec 31, 2024'."""
    if not value:
        return NOT_AVAILABLE
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return NOT_AVAILABLE
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"
