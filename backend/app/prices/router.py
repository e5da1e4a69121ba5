"""HTTP endpoints for the price cache."""

from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .cache import PriceCache
from .models import PriceRecord, now_ms
from .query import PriceQuery, TokenNotFoundError

SERVICE_NAME = "prices-api"


def _serialize(snapshot: dict[str, PriceRecord]) -> dict[str, dict]:
    return {symbol: record.to_dict() for symbol, record in snapshot.items()}


def create_prices_router(query: PriceQuery) -> APIRouter:
    """Create the /api/prices router bound to a PriceQuery.

    Factory pattern so the query (and through it the cache) is injected
    rather than imported from a global.
    """
    router = APIRouter(prefix="/api/prices", tags=["prices"])

    @router.get("")
    async def get_prices() -> dict:
        """All cached prices. Always served from memory, even if stale."""
        overview = query.get_all()
        return {
            "success": True,
            "data": _serialize(overview.snapshot),
            "meta": {
                "lastUpdate": overview.last_update,
                "cacheAge": overview.cache_age,
                "tokensCount": overview.tokens_count,
                "isUpdating": overview.is_updating,
            },
        }

    @router.post("/refresh")
    async def refresh_prices() -> dict:
        """Trigger a refresh now. Shares the scheduler's in-progress guard."""
        snapshot = await query.force_refresh()
        return {
            "success": True,
            "message": "Cache refreshed",
            "data": _serialize(snapshot),
            "timestamp": now_ms(),
        }

    @router.get("/{token}")
    async def get_price(token: str):
        try:
            record = query.get_one(token)
        except TokenNotFoundError as e:
            return JSONResponse(
                status_code=404,
                content={
                    "success": False,
                    "error": str(e),
                    "availableTokens": e.available_tokens,
                },
            )
        overview = query.get_all()
        return {
            "success": True,
            "token": token.upper(),
            "data": record.to_dict(),
            "meta": {
                "lastUpdate": overview.last_update,
                "cacheAge": overview.cache_age,
            },
        }

    return router


def create_health_router(cache: PriceCache, started_at: float | None = None) -> APIRouter:
    """Create the /health router. `started_at` is a time.monotonic() reading."""
    router = APIRouter(tags=["health"])
    start = time.monotonic() if started_at is None else started_at

    @router.get("/health")
    async def health() -> dict:
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "uptime": round(time.monotonic() - start, 3),
            "lastUpdate": cache.last_update,
            "tokensAvailable": len(cache),
            "timestamp": now_ms(),
        }

    return router
