"""DexScreener single-pair price source."""

from __future__ import annotations

import logging

import httpx

from .interface import PriceSource
from .models import SOURCE_DEXSCREENER, PriceRecord, now_ms, parse_change, parse_price
from .tokens import (
    DEFAULT_TIMEOUT,
    DEXSCREENER_BASE_URL,
    ORBE_CHAIN,
    ORBE_PAIR_ADDRESS,
    ORBE_SYMBOL,
)

logger = logging.getLogger(__name__)


class DexScreenerSource(PriceSource):
    """PriceSource for one token quoted by a single DEX pool on DexScreener.

    Queries GET /latest/dex/pairs/{chain}/{pair} and yields at most one
    record, under `symbol`. DexScreener reports priceUsd as a string and
    the 24h change under priceChange.h24.
    """

    name = SOURCE_DEXSCREENER

    def __init__(
        self,
        client: httpx.AsyncClient,
        symbol: str = ORBE_SYMBOL,
        chain: str = ORBE_CHAIN,
        pair_address: str = ORBE_PAIR_ADDRESS,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = DEXSCREENER_BASE_URL,
    ) -> None:
        self._client = client
        self._symbol = symbol.upper().strip()
        self._timeout = timeout
        self._url = f"{base_url}/pairs/{chain}/{pair_address}"

    @property
    def symbol(self) -> str:
        return self._symbol

    async def fetch(self) -> dict[str, PriceRecord]:
        try:
            response = await self._client.get(
                self._url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            if not response.is_success:
                logger.warning("DexScreener returned %d", response.status_code)
                return {}
            record = self._parse(response.json())
        except Exception as e:
            logger.error("DexScreener fetch failed: %s", e)
            return {}

        if record is None:
            logger.warning("DexScreener: no valid price for %s", self._symbol)
            return {}

        logger.info("%s: $%.6f", self._symbol, record.price)
        return {self._symbol: record}

    def _parse(self, data: object) -> PriceRecord | None:
        if not isinstance(data, dict):
            raise ValueError(f"unexpected payload type {type(data).__name__}")

        pair = data.get("pair")
        if not isinstance(pair, dict):
            return None
        price = parse_price(pair.get("priceUsd"))
        if price is None:
            return None

        price_change = pair.get("priceChange")
        change = price_change.get("h24") if isinstance(price_change, dict) else None
        return PriceRecord(
            price=price,
            change_24h=parse_change(change),
            source=self.name,
            updated_at=now_ms(),
        )
