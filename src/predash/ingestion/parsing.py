"""Total parse helpers shared by both normalizers. None of these raise."""

from __future__ import annotations

import json
import math
from typing import Any

SPORTS = "sports"
ENTERTAINMENT = "entertainment"
OTHER = "other"

SPORTS_KEYWORDS = (
    "sport", "nfl", "nba", "mlb", "nhl", "soccer", "football", "basketball",
    "super bowl", "world series", "world cup", "finals", "championship",
)
ENTERTAINMENT_KEYWORDS = (
    "entertain", "movie", "music", "celebrity", "oscar", "grammy", "emmy",
    "box office", "album", "film", "actor", "actress", "artist", "awards",
)


def to_float(value: Any) -> float | None:
    """Parse int/float/numeric string. None on absence or garbage (incl. NaN/inf)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f


def to_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def to_str_list(value: Any) -> list[str]:
    """List of strings from a list or a JSON-encoded list. Tag dicts use their label."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return []
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if isinstance(item, dict):
            item = item.get("label") or item.get("slug")
        s = to_str(item)
        if s is not None:
            out.append(s)
    return out


def to_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def clamp_price(p: float) -> float:
    return min(1.0, max(0.0, p))


def non_negative(value: float | None) -> float | None:
    if value is None:
        return None
    return max(0.0, value)


def bucket_category(raw: Any) -> str | None:
    """Case-insensitive substring bucketing. None when no category was given."""
    s = to_str(raw)
    if s is None:
        return None
    lower = s.lower()
    if "sport" in lower:
        return SPORTS
    if "entertain" in lower:
        return ENTERTAINMENT
    return OTHER


def guess_category(text: str) -> str | None:
    """Keyword match over free text (question, description, tags)."""
    lower = text.lower()
    if any(k in lower for k in SPORTS_KEYWORDS):
        return SPORTS
    if any(k in lower for k in ENTERTAINMENT_KEYWORDS):
        return ENTERTAINMENT
    return None
