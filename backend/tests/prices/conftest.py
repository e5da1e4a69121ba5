"""Fixtures and fake sources for price cache tests.

The fakes implement PriceSource without any network access so the
refresher, scheduler and routes can be exercised deterministically.
"""

import asyncio

import pytest

from app.prices.cache import PriceCache
from app.prices.interface import PriceSource
from app.prices.models import PriceRecord


class StaticSource(PriceSource):
    """Returns the same prices on every fetch, optionally after a delay."""

    def __init__(self, name: str, prices: dict[str, PriceRecord], delay: float = 0.0) -> None:
        self.name = name
        self._prices = prices
        self._delay = delay
        self.calls = 0

    async def fetch(self) -> dict[str, PriceRecord]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        return dict(self._prices)


class FailingSource(PriceSource):
    """Breaks the fetch() contract by raising."""

    def __init__(self, name: str = "broken") -> None:
        self.name = name

    async def fetch(self) -> dict[str, PriceRecord]:
        raise RuntimeError("upstream exploded")


class BlockingSource(PriceSource):
    """Blocks inside fetch() until `release` is set."""

    def __init__(self, name: str, prices: dict[str, PriceRecord]) -> None:
        self.name = name
        self._prices = prices
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch(self) -> dict[str, PriceRecord]:
        self.started.set()
        await self.release.wait()
        return dict(self._prices)


def make_record(price: float, change_24h: float = 0.0, source: str = "test") -> PriceRecord:
    return PriceRecord(price=price, change_24h=change_24h, source=source, updated_at=1_700_000_000_000)


@pytest.fixture
def cache() -> PriceCache:
    return PriceCache()


@pytest.fixture
def record():
    """Factory for PriceRecords with a fixed timestamp."""
    return make_record


@pytest.fixture
def static_source():
    """Factory: static_source(name, {symbol: price_or_record}, delay=0.0)."""

    def _factory(name: str, prices: dict, delay: float = 0.0) -> StaticSource:
        records = {
            symbol: value if isinstance(value, PriceRecord) else make_record(value, source=name)
            for symbol, value in prices.items()
        }
        return StaticSource(name, records, delay=delay)

    return _factory


@pytest.fixture
def failing_source():
    return FailingSource


@pytest.fixture
def blocking_source():
    """Factory: blocking_source(name, {symbol: price}). Events bind to the running loop."""

    def _factory(name: str, prices: dict) -> BlockingSource:
        return BlockingSource(name, {s: make_record(p, source=name) for s, p in prices.items()})

    return _factory
