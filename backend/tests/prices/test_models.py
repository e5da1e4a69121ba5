"""Tests for PriceRecord and the parsing helpers."""

import math

import pytest

from app.prices.models import PriceRecord, now_ms, parse_change, parse_price


class TestPriceRecord:
    """Unit tests for the PriceRecord model."""

    def test_change_defaults_to_zero(self):
        """Test that a missing 24h change falls back to 0."""
        record = PriceRecord(price=1.0, source="coingecko", updated_at=1234567890000)
        assert record.change_24h == 0.0

    def test_source_is_required(self):
        """A record never claims a provenance it was not given."""
        with pytest.raises(TypeError):
            PriceRecord(price=1.0)

    def test_updated_at_defaults_to_now(self):
        """Test that updated_at is stamped in milliseconds at creation."""
        before = now_ms()
        record = PriceRecord(price=1.0, source="test")
        assert before <= record.updated_at <= now_ms()

    def test_to_dict_uses_wire_names(self):
        """Test serialization to the JSON field names."""
        record = PriceRecord(price=50000.0, change_24h=2.5, source="coingecko", updated_at=1234567890000)
        assert record.to_dict() == {
            "price": 50000.0,
            "change24h": 2.5,
            "source": "coingecko",
            "updatedAt": 1234567890000,
        }

    def test_immutability(self):
        """Test that PriceRecord is immutable."""
        record = PriceRecord(price=1.0, source="test")
        with pytest.raises(AttributeError):
            record.price = 2.0


class TestParsePrice:
    """Tests for parse_price()."""

    @pytest.mark.parametrize("value, expected", [(50000, 50000.0), (0.0012, 0.0012), ("0.0012", 0.0012)])
    def test_valid_prices(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", [None, 0, -1.5, "abc", "", math.nan, math.inf, True, {}, []])
    def test_invalid_prices_rejected(self, value):
        """Zero, negative, NaN and non-numeric values never become a price."""
        assert parse_price(value) is None


class TestParseChange:
    """Tests for parse_change()."""

    def test_missing_is_zero(self):
        assert parse_change(None) == 0.0

    def test_negative_kept(self):
        assert parse_change("-1.2") == -1.2

    def test_garbage_is_zero(self):
        assert parse_change("n/a") == 0.0
        assert parse_change(math.nan) == 0.0
