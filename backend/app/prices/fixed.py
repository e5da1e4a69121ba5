"""Fixed-price provider for USD-pegged stablecoins."""

from __future__ import annotations

from .models import SOURCE_FIXED, PriceRecord, now_ms
from .tokens import STABLECOINS


class FixedPriceProvider:
    """Supplies a constant 1.0 USD quote for each pegged symbol.

    Pure and synchronous; it forms the baseline of every refresh cycle.
    """

    PEGGED_PRICE = 1.0

    def __init__(self, symbols: list[str] | None = None) -> None:
        self._symbols = [s.upper() for s in (symbols if symbols is not None else STABLECOINS)]

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)

    def provide(self) -> dict[str, PriceRecord]:
        ts = now_ms()
        return {
            symbol: PriceRecord(
                price=self.PEGGED_PRICE,
                change_24h=0.0,
                source=SOURCE_FIXED,
                updated_at=ts,
            )
            for symbol in self._symbols
        }
