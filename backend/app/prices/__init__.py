"""Token price cache subsystem.

Public API:
    PriceRecord          - Immutable price record dataclass
    PriceCache           - In-memory snapshot store
    PriceSource          - Abstract interface for upstream providers
    FixedPriceProvider   - Constant quotes for pegged stablecoins
    CacheRefresher       - One fetch-merge-publish cycle with an overlap guard
    RefreshScheduler     - Startup refresh plus fixed-interval loop
    PriceQuery           - Read accessors and the manual refresh trigger
    TokenNotFoundError   - Lookup failure carrying the available symbols
    create_price_sources - Factory for the CoinGecko and DexScreener sources
    create_prices_router - FastAPI router factory for /api/prices
    create_health_router - FastAPI router factory for /health
"""

from .cache import PriceCache
from .factory import create_price_sources
from .fixed import FixedPriceProvider
from .interface import PriceSource
from .models import PriceRecord
from .query import PriceQuery, TokenNotFoundError
from .refresher import CacheRefresher
from .router import create_health_router, create_prices_router
from .scheduler import RefreshScheduler

__all__ = [
    "PriceRecord",
    "PriceCache",
    "PriceSource",
    "FixedPriceProvider",
    "CacheRefresher",
    "RefreshScheduler",
    "PriceQuery",
    "TokenNotFoundError",
    "create_price_sources",
    "create_prices_router",
    "create_health_router",
]
