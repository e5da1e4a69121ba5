"""Factory for the upstream price sources."""

from __future__ import annotations

import logging
import math
import os

import httpx

from .coingecko import CoinGeckoSource
from .dexscreener import DexScreenerSource
from .interface import PriceSource
from .tokens import DEFAULT_REFRESH_INTERVAL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def _float_from_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    return value


def source_timeout_from_env() -> float:
    """Per-request upstream timeout in seconds (PRICE_SOURCE_TIMEOUT)."""
    return _float_from_env("PRICE_SOURCE_TIMEOUT", DEFAULT_TIMEOUT)


def refresh_interval_from_env() -> float:
    """Seconds between scheduled refreshes (PRICE_REFRESH_INTERVAL)."""
    return _float_from_env("PRICE_REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL)


def create_price_sources(client: httpx.AsyncClient) -> list[PriceSource]:
    """Create the network-bound sources in merge order.

    The order matters: on a symbol collision the later source wins, so the
    single-pair DexScreener quote overrides the CoinGecko batch.
    """
    timeout = source_timeout_from_env()
    sources: list[PriceSource] = [
        CoinGeckoSource(client=client, timeout=timeout),
        DexScreenerSource(client=client, timeout=timeout),
    ]
    logger.info(
        "Price sources: %s (timeout %.1fs)",
        ", ".join(source.name for source in sources),
        timeout,
    )
    return sources
