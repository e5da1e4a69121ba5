"""Data models for token prices."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

SOURCE_FIXED = "fixed"
SOURCE_COINGECKO = "coingecko"
SOURCE_DEXSCREENER = "dexscreener"


def now_ms() -> int:
    """Current wall-clock time in Unix milliseconds."""
    return int(time.time() * 1000)


def parse_price(value: object) -> float | None:
    """Return ``value`` as a float if it is a finite, positive price.

    Accepts numbers and numeric strings (DexScreener sends prices as strings).
    Anything else, including booleans, yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def parse_change(value: object) -> float:
    """24h change as a float; missing or unparseable values become 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        change = float(value)
    except (TypeError, ValueError):
        return 0.0
    return change if math.isfinite(change) else 0.0


@dataclass(frozen=True, slots=True)
class PriceRecord:
    """Immutable price state of a single token at a point in time."""

    price: float
    source: str
    change_24h: float = 0.0
    updated_at: int = field(default_factory=now_ms)  # Unix milliseconds

    def to_dict(self) -> dict:
        """Serialize for JSON responses."""
        return {
            "price": self.price,
            "change24h": self.change_24h,
            "source": self.source,
            "updatedAt": self.updated_at,
        }
