"""Token tables and upstream constants for the price sources."""

# Pegged 1:1 to USD, served without a network lookup
STABLECOINS: list[str] = ["USDT", "USDC", "BUSD", "DAI"]

# Symbol -> CoinGecko coin id (CoinGecko is keyed by id, not ticker)
COINGECKO_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "BNB": "binancecoin",
    "SOL": "solana",
}

STANDARD_TOKENS: list[str] = list(COINGECKO_IDS)

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"
DEXSCREENER_BASE_URL = "https://api.dexscreener.com/latest/dex"

# ORBE only trades on a Solana DEX pool
ORBE_SYMBOL = "ORBE"
ORBE_CHAIN = "solana"
ORBE_PAIR_ADDRESS = "dbEamNkWgS3N6JGRcL3T4VDJM2ooUnVzbrN2o1NP4YA"

DEFAULT_TIMEOUT = 4.0  # seconds, per upstream request
DEFAULT_REFRESH_INTERVAL = 30.0  # seconds
