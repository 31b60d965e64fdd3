"""Tests for the pricing engines."""

import math
from datetime import datetime, timezone

import pytest

from quantsim_app.errors import ConfigurationError
from quantsim_app.pricing.engine import NoCostPricingEngine, SpreadPricingEngine

NOW = datetime(2024, 1, 2, tzinfo=timezone.utc)


class TestNoCostPricing:
    """Test frictionless pricing."""

    def test_default_price(self, price_bar):
        """Test market price is the bar close for a buy."""
        pricing = NoCostPricingEngine().get_pricing(price_bar, NOW)
        assert pricing.market_price(100) == price_bar.get_price()

    @pytest.mark.parametrize("size", [1, 100, -1, -100, 0.5, 1e6])
    def test_independent_of_size(self, price_bar, size):
        """Test market price ignores sign and magnitude of size."""
        pricing = NoCostPricingEngine().get_pricing(price_bar, NOW)
        assert pricing.market_price(size) == 100.5

    def test_price_type(self, price_bar):
        """Test configured reference price is used."""
        pricing = NoCostPricingEngine("OPEN").get_pricing(price_bar, NOW)
        assert pricing.market_price(-10) == 100.0

    def test_invalid_price_type(self):
        """Test unknown price types fail at construction."""
        with pytest.raises(ConfigurationError) as exc_info:
            NoCostPricingEngine("MID")
        assert exc_info.value.field == "price_type"


class TestSpreadPricing:
    """Test spread based pricing."""

    def test_200_bips_spread(self, price_bar):
        """Test 200 bips spread gives 1% above and below the reference price."""
        pricing = SpreadPricingEngine(200, "OPEN").get_pricing(price_bar, NOW)

        assert pricing.market_price(100) == pytest.approx(price_bar.get_price("OPEN") * 1.01)
        assert pricing.market_price(-100) == pytest.approx(price_bar.get_price("OPEN") * 0.99)

    @pytest.mark.parametrize("size", [1, 7, 250.5, 1e5])
    def test_price_independent_of_magnitude(self, price_bar, size):
        """Test only the direction of the size matters."""
        pricing = SpreadPricingEngine(200).get_pricing(price_bar, NOW)
        assert pricing.market_price(size) == pytest.approx(100.5 * 1.01)
        assert pricing.market_price(-size) == pytest.approx(100.5 * 0.99)

    def test_round_trip_costs_full_spread(self, price_bar):
        """Test buying and selling the same size costs the full spread."""
        engine = SpreadPricingEngine(50)
        pricing = engine.get_pricing(price_bar, NOW)

        buy = pricing.market_price(10)
        sell = pricing.market_price(-10)

        assert (buy - sell) / price_bar.get_price() == pytest.approx(engine.spread)

    def test_zero_size_returns_reference(self, price_bar):
        """Test zero size quotes the reference price."""
        pricing = SpreadPricingEngine(200).get_pricing(price_bar, NOW)
        assert pricing.market_price(0) == 100.5

    def test_zero_spread_is_no_cost(self, price_bar):
        """Test zero spread behaves like no cost pricing."""
        pricing = SpreadPricingEngine(0).get_pricing(price_bar, NOW)
        assert pricing.market_price(5) == 100.5
        assert pricing.market_price(-5) == 100.5

    @pytest.mark.parametrize("spread", [-1, math.nan, math.inf, "10"])
    def test_invalid_spread(self, spread):
        """Test invalid spreads fail at construction."""
        with pytest.raises(ConfigurationError) as exc_info:
            SpreadPricingEngine(spread)
        assert exc_info.value.field == "spread_bips"

    @pytest.mark.parametrize("size", [math.nan, math.inf, -math.inf])
    def test_pathological_size(self, price_bar, size):
        """Test non finite sizes are rejected."""
        pricing = SpreadPricingEngine(10).get_pricing(price_bar, NOW)
        with pytest.raises(ValueError):
            pricing.market_price(size)

    def test_pricing_is_bound_to_bar(self, price_bar):
        """Test pricing keeps the bar and time it was created for."""
        pricing = SpreadPricingEngine(10).get_pricing(price_bar, NOW)
        assert pricing.bar is price_bar
        assert pricing.time == NOW
