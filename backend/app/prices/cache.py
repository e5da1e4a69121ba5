"""In-memory snapshot store for token prices."""

from __future__ import annotations

from threading import Lock

from .models import PriceRecord


class PriceCache:
    """Process-wide store of the current price snapshot.

    Writer: CacheRefresher only (try_begin_update / publish / end_update).
    Readers: PriceQuery and the HTTP routers.

    The snapshot is replaced wholesale on publish() and never mutated in
    place, so a reader holding a reference always sees a complete map.
    """

    def __init__(self) -> None:
        self._snapshot: dict[str, PriceRecord] = {}
        self._last_update: int | None = None  # Unix ms of the last finished refresh
        self._is_updating = False
        self._lock = Lock()

    # --- Writer API (CacheRefresher) ---

    def try_begin_update(self) -> bool:
        """Set the in-progress flag. Returns False if a refresh already holds it."""
        with self._lock:
            if self._is_updating:
                return False
            self._is_updating = True
            return True

    def end_update(self) -> None:
        with self._lock:
            self._is_updating = False

    def publish(self, snapshot: dict[str, PriceRecord], timestamp: int) -> None:
        """Swap in a new snapshot and record when it was produced."""
        new_snapshot = dict(snapshot)
        with self._lock:
            self._snapshot = new_snapshot
            self._last_update = timestamp

    # --- Reader API ---

    def get(self, symbol: str) -> PriceRecord | None:
        """Record for an (already normalized) symbol, or None if unknown."""
        with self._lock:
            return self._snapshot.get(symbol)

    def get_all(self) -> dict[str, PriceRecord]:
        """The current snapshot. Returns a shallow copy."""
        with self._lock:
            return dict(self._snapshot)

    def symbols(self) -> list[str]:
        with self._lock:
            return list(self._snapshot)

    @property
    def last_update(self) -> int | None:
        return self._last_update

    @property
    def is_updating(self) -> bool:
        return self._is_updating

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshot)

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._snapshot
