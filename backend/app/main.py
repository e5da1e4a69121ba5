"""FastAPI application for the token prices API."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .prices import (
    CacheRefresher,
    FixedPriceProvider,
    PriceCache,
    PriceQuery,
    PriceSource,
    RefreshScheduler,
    create_health_router,
    create_price_sources,
    create_prices_router,
)
from .prices.factory import refresh_interval_from_env

logger = logging.getLogger(__name__)

DEFAULT_PORT = 10000
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_PROCESS_STARTED = time.monotonic()


def configure_logging() -> None:
    level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    logging.basicConfig(level=level, format=LOG_FORMAT)


def install_exception_logging(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Log uncaught exceptions and unhandled task errors instead of losing them.

    Diagnostic only: the process is neither exited nor restarted here.
    """

    def _excepthook(exc_type, exc, tb) -> None:
        logger.critical("Uncaught exception", exc_info=(exc_type, exc, tb))

    def _loop_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
        exc = context.get("exception")
        message = context.get("message", "Unhandled error in event loop")
        if exc is not None:
            logger.error("Unhandled async error: %s", message, exc_info=exc)
        else:
            logger.error("Unhandled async error: %s", message)

    sys.excepthook = _excepthook
    if loop is not None:
        loop.set_exception_handler(_loop_handler)


def create_app(
    sources: Sequence[PriceSource] | None = None,
    refresh_interval: float | None = None,
) -> FastAPI:
    """Build the app and wire the price subsystem into it.

    `sources` overrides the default upstream sources (no HTTP client is
    created then); `refresh_interval` overrides PRICE_REFRESH_INTERVAL.
    The scheduler starts in the lifespan, so the first refresh completes
    before the app serves requests.

    With the default sources, each lifespan run opens its own HTTP client
    and closes it on shutdown.
    """
    interval = refresh_interval if refresh_interval is not None else refresh_interval_from_env()

    cache = PriceCache()
    refresher = CacheRefresher(cache, FixedPriceProvider(), sources or [])
    scheduler = RefreshScheduler(refresher, interval=interval)
    query = PriceQuery(cache, refresher)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        install_exception_logging(asyncio.get_running_loop())

        client: httpx.AsyncClient | None = None
        if sources is None:
            client = httpx.AsyncClient(follow_redirects=True)
            refresher.replace_sources(create_price_sources(client))

        try:
            await scheduler.start()
            yield
        finally:
            await scheduler.stop()
            if client is not None:
                await client.aclose()

    app = FastAPI(title="Prices API", lifespan=lifespan)
    app.state.cache = cache
    app.state.refresher = refresher
    app.state.scheduler = scheduler
    app.state.query = query
    app.include_router(create_prices_router(query))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(create_health_router(cache, started_at=_PROCESS_STARTED))
    return app


def run() -> None:
    """Entry point: serve on HOST:PORT (default 0.0.0.0:10000)."""
    configure_logging()
    install_exception_logging()

    raw_port = os.environ.get("PORT", "").strip()
    try:
        port = int(raw_port) if raw_port else DEFAULT_PORT
    except ValueError:
        logger.warning("Ignoring invalid PORT=%r, using %d", raw_port, DEFAULT_PORT)
        port = DEFAULT_PORT
    host = os.environ.get("HOST", "0.0.0.0")

    logger.info("Prices API starting on port %d (health: /health, prices: /api/prices)", port)
    uvicorn.run(create_app(), host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
