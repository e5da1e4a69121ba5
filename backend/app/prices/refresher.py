"""Refresh cycle: fetch every source, merge, publish."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from .cache import PriceCache
from .fixed import FixedPriceProvider
from .interface import PriceSource
from .models import PriceRecord, now_ms, parse_price

logger = logging.getLogger(__name__)


class CacheRefresher:
    """Builds a fresh snapshot and publishes it to the PriceCache.

    One cycle:
        1. Claim the cache's in-progress flag (skip if another cycle holds it)
        2. Start from the fixed-price baseline
        3. Fetch all sources concurrently and wait for every one of them
        4. Merge in list order, later sources overwriting earlier ones;
           records without a finite positive price are dropped
        5. Publish the new snapshot with the completion timestamp
        6. Release the flag, whatever happened

    Merge order depends only on the order of `sources`, never on which
    request finishes first.
    """

    def __init__(
        self,
        cache: PriceCache,
        fixed: FixedPriceProvider,
        sources: Sequence[PriceSource],
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._cache = cache
        self._fixed = fixed
        self._sources = list(sources)
        self._clock = clock

    @property
    def sources(self) -> list[PriceSource]:
        return list(self._sources)

    def replace_sources(self, sources: Sequence[PriceSource]) -> None:
        """Swap the source list; takes effect from the next cycle."""
        self._sources = list(sources)

    async def refresh(self) -> bool:
        """Run one refresh cycle. Returns False if skipped due to a cycle in flight.

        Never raises (except on cancellation). A failed cycle leaves the
        previous snapshot in place and waits for the next scheduled tick.
        """
        if not self._cache.try_begin_update():
            logger.info("Price refresh already in progress, skipping")
            return False

        started = time.monotonic()
        try:
            snapshot: dict[str, PriceRecord] = dict(self._fixed.provide())
            sources = self._sources

            results = await asyncio.gather(
                *(source.fetch() for source in sources),
                return_exceptions=True,
            )
            for source, result in zip(sources, results):
                if isinstance(result, BaseException):
                    # Sources should swallow their own errors; guard anyway
                    logger.error("Price source %s raised: %r", source.name, result)
                    continue
                for symbol, record in result.items():
                    if parse_price(record.price) is None:
                        logger.warning(
                            "Dropping %s from %s: invalid price %r",
                            symbol,
                            source.name,
                            record.price,
                        )
                        continue
                    snapshot[symbol] = record

            self._cache.publish(snapshot, timestamp=self._clock())
            logger.info(
                "Price cache refreshed in %.0fms: %d tokens available",
                (time.monotonic() - started) * 1000,
                len(snapshot),
            )
        except Exception:
            logger.exception("Price refresh failed")
        finally:
            self._cache.end_update()
        return True
