"""Abstract interface for price sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import PriceRecord


class PriceSource(ABC):
    """Contract for upstream price providers.

    A source fetches raw quotes from one provider and normalizes them into
    PriceRecords. It never writes to the PriceCache itself; the CacheRefresher
    calls every source concurrently and merges what they return.

    Failures never escape fetch(). Timeouts, bad statuses and malformed
    payloads are logged and degrade to an empty result, so one broken
    provider cannot abort a refresh cycle.
    """

    #: Provenance tag, also used in log messages
    name: str

    @abstractmethod
    async def fetch(self) -> dict[str, PriceRecord]:
        """Return {symbol: PriceRecord} for every valid quote, possibly empty."""
