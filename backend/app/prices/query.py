"""Read-side accessors over the price cache."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .cache import PriceCache
from .models import PriceRecord, now_ms
from .refresher import CacheRefresher


class TokenNotFoundError(LookupError):
    """Raised by PriceQuery.get_one() for a symbol missing from the snapshot."""

    def __init__(self, symbol: str, available_tokens: list[str]) -> None:
        super().__init__(f"Token {symbol} not found")
        self.symbol = symbol
        self.available_tokens = available_tokens


@dataclass(frozen=True, slots=True)
class PricesOverview:
    """Everything GET /api/prices reports, captured at one instant."""

    snapshot: dict[str, PriceRecord]
    last_update: int | None
    cache_age: int | None
    tokens_count: int
    is_updating: bool


class PriceQuery:
    """Query interface used by the HTTP layer.

    Reads never touch the network. force_refresh() goes through the same
    CacheRefresher as the scheduler and shares its in-progress guard.
    """

    def __init__(
        self,
        cache: PriceCache,
        refresher: CacheRefresher,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._cache = cache
        self._refresher = refresher
        self._clock = clock

    def cache_age(self) -> int | None:
        """Milliseconds since the last refresh, or None if none has finished."""
        last_update = self._cache.last_update
        if last_update is None:
            return None
        return self._clock() - last_update

    def get_all(self) -> PricesOverview:
        snapshot = self._cache.get_all()
        return PricesOverview(
            snapshot=snapshot,
            last_update=self._cache.last_update,
            cache_age=self.cache_age(),
            tokens_count=len(snapshot),
            is_updating=self._cache.is_updating,
        )

    def get_one(self, symbol: str) -> PriceRecord:
        """Case-insensitive lookup. Raises TokenNotFoundError if absent."""
        symbol = symbol.upper()
        snapshot = self._cache.get_all()
        record = snapshot.get(symbol)
        if record is None:
            raise TokenNotFoundError(symbol, list(snapshot))
        return record

    async def force_refresh(self) -> dict[str, PriceRecord]:
        """Refresh out of band and return the resulting snapshot.

        If a refresh is already running this is a no-op and the snapshot
        returned is the one that was current before the call.
        """
        await self._refresher.refresh()
        return self._cache.get_all()
