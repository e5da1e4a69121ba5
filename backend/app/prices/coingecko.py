"""CoinGecko batch price source."""

from __future__ import annotations

import logging

import httpx

from .interface import PriceSource
from .models import SOURCE_COINGECKO, PriceRecord, now_ms, parse_change, parse_price
from .tokens import COINGECKO_BASE_URL, COINGECKO_IDS, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class CoinGeckoSource(PriceSource):
    """PriceSource backed by CoinGecko's public /simple/price endpoint.

    All mapped coins are requested in a single call. The response is keyed by
    CoinGecko id, e.g. {"bitcoin": {"usd": 50000, "usd_24h_change": 2.5}},
    and is mapped back to symbols through the id table.
    """

    name = SOURCE_COINGECKO

    def __init__(
        self,
        client: httpx.AsyncClient,
        ids: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = COINGECKO_BASE_URL,
    ) -> None:
        self._client = client
        self._ids = dict(ids if ids is not None else COINGECKO_IDS)
        self._timeout = timeout
        self._url = f"{base_url}/simple/price"

    async def fetch(self) -> dict[str, PriceRecord]:
        try:
            response = await self._client.get(
                self._url,
                params={
                    "ids": ",".join(self._ids.values()),
                    "vs_currencies": "usd",
                    "include_24hr_change": "true",
                },
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            if not response.is_success:
                logger.warning("CoinGecko returned %d", response.status_code)
                return {}
            prices = self._parse(response.json())
        except Exception as e:
            # Timeouts, connection errors, invalid JSON
            logger.error("CoinGecko fetch failed: %s", e)
            return {}

        logger.info("CoinGecko: %d tokens", len(prices))
        return prices

    def _parse(self, data: object) -> dict[str, PriceRecord]:
        if not isinstance(data, dict):
            raise ValueError(f"unexpected payload type {type(data).__name__}")

        prices: dict[str, PriceRecord] = {}
        for symbol, coin_id in self._ids.items():
            entry = data.get(coin_id)
            if not isinstance(entry, dict):
                continue
            price = parse_price(entry.get("usd"))
            if price is None:
                continue
            prices[symbol] = PriceRecord(
                price=price,
                change_24h=parse_change(entry.get("usd_24h_change")),
                source=self.name,
                updated_at=now_ms(),
            )
        return prices
