"""Tests for the price source factory and environment settings."""

import os
from unittest.mock import MagicMock, patch

from app.prices.coingecko import CoinGeckoSource
from app.prices.dexscreener import DexScreenerSource
from app.prices.factory import (
    create_price_sources,
    refresh_interval_from_env,
    source_timeout_from_env,
)


class TestFactory:
    """Tests for create_price_sources."""

    def test_sources_in_merge_order(self):
        """CoinGecko first so the single-pair source wins collisions."""
        with patch.dict(os.environ, {}, clear=True):
            sources = create_price_sources(MagicMock())

        assert [type(s) for s in sources] == [CoinGeckoSource, DexScreenerSource]
        assert [s.name for s in sources] == ["coingecko", "dexscreener"]

    def test_sources_share_client(self):
        client = MagicMock()
        with patch.dict(os.environ, {}, clear=True):
            sources = create_price_sources(client)

        assert all(s._client is client for s in sources)

    def test_default_timeout(self):
        with patch.dict(os.environ, {}, clear=True):
            sources = create_price_sources(MagicMock())

        assert all(s._timeout == 4.0 for s in sources)

    def test_timeout_from_env(self):
        with patch.dict(os.environ, {"PRICE_SOURCE_TIMEOUT": "2.5"}, clear=True):
            sources = create_price_sources(MagicMock())

        assert all(s._timeout == 2.5 for s in sources)


class TestEnvSettings:
    """Tests for the numeric environment readers."""

    def test_interval_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert refresh_interval_from_env() == 30.0

    def test_interval_override(self):
        with patch.dict(os.environ, {"PRICE_REFRESH_INTERVAL": "5"}, clear=True):
            assert refresh_interval_from_env() == 5.0

    def test_invalid_values_fall_back(self):
        with patch.dict(os.environ, {"PRICE_REFRESH_INTERVAL": "soon", "PRICE_SOURCE_TIMEOUT": "-1"}, clear=True):
            assert refresh_interval_from_env() == 30.0
            assert source_timeout_from_env() == 4.0

    def test_non_finite_values_fall_back(self):
        """inf would stall the refresh loop; nan is not a usable timeout."""
        with patch.dict(os.environ, {"PRICE_REFRESH_INTERVAL": "inf", "PRICE_SOURCE_TIMEOUT": "nan"}, clear=True):
            assert refresh_interval_from_env() == 30.0
            assert source_timeout_from_env() == 4.0

        with patch.dict(os.environ, {"PRICE_REFRESH_INTERVAL": "-inf", "PRICE_SOURCE_TIMEOUT": "Infinity"}, clear=True):
            assert refresh_interval_from_env() == 30.0
            assert source_timeout_from_env() == 4.0

    def test_blank_value_uses_default(self):
        with patch.dict(os.environ, {"PRICE_SOURCE_TIMEOUT": "   "}, clear=True):
            assert source_timeout_from_env() == 4.0
