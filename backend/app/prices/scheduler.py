"""Periodic trigger for the cache refresher."""

from __future__ import annotations

import asyncio
import logging

from .refresher import CacheRefresher
from .tokens import DEFAULT_REFRESH_INTERVAL

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs a refresh at startup, then one every `interval` seconds.

    Ticks fire on a fixed cadence and do not wait for the previous cycle.
    If a cycle outlives the interval, the next tick's refresh finds the
    in-progress flag set and returns immediately; it is not queued.
    """

    def __init__(
        self,
        refresher: CacheRefresher,
        interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._refresher = refresher
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Await an immediate first refresh, then start the background loop."""
        logger.info("Starting price auto-refresh (every %.1fs)", self._interval)
        await self.tick()
        self._task = asyncio.create_task(self._run_loop(), name="price-refresh-loop")

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None

        for task in list(self._inflight):
            task.cancel()
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)
        self._inflight.clear()
        logger.info("Price auto-refresh stopped")

    async def tick(self) -> bool:
        """Run a single refresh cycle now. Returns what the refresher returns."""
        return await self._refresher.refresh()

    async def _run_loop(self) -> None:
        """Spawn a refresh every interval. First refresh already happened in start()."""
        while True:
            await asyncio.sleep(self._interval)
            task = asyncio.create_task(self.tick(), name="price-refresh")
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
