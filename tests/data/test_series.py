"""Tests for price bar models and the rolling price window."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from quantsim_app.data.models import Event, PriceBar
from quantsim_app.data.series import PriceBarSeries
from quantsim_app.errors import MalformedDataError

START = datetime(2024, 1, 2, tzinfo=timezone.utc)


class TestPriceBar:
    """Test price bar construction and price lookup."""

    def test_get_price(self, price_bar):
        """Test each supported price type."""
        assert price_bar.get_price() == 100.5
        assert price_bar.get_price("CLOSE") == 100.5
        assert price_bar.get_price("OPEN") == 100.0
        assert price_bar.get_price("HIGH") == 101.0
        assert price_bar.get_price("LOW") == 99.0
        assert price_bar.get_price("TYPICAL") == pytest.approx((101.0 + 99.0 + 100.5) / 3)

    def test_unknown_price_type(self, price_bar):
        """Test unknown price types raise."""
        with pytest.raises(ValueError):
            price_bar.get_price("VWAP")

    def test_high_below_low(self, asset):
        """Test inconsistent bars are rejected."""
        with pytest.raises(MalformedDataError) as exc_info:
            PriceBar(asset, 10.0, 9.0, 11.0, 10.0)
        assert exc_info.value.field == "high"

    def test_non_finite_price(self, asset):
        """Test NaN prices are rejected."""
        with pytest.raises(MalformedDataError) as exc_info:
            PriceBar(asset, math.nan, 11.0, 9.0, 10.0)
        assert exc_info.value.field == "open"

    def test_event_of(self, asset, other_asset, make_bar):
        """Test events are keyed by the asset of each bar."""
        event = Event.of(START, make_bar(asset, 10.0), make_bar(other_asset, 20.0))
        assert event.get_price(asset) == 10.0
        assert event.get_price(other_asset) == 20.0
        assert len(event.items) == 2


class TestPriceBarSeries:
    """Test the sliding window."""

    def test_filling(self, asset, make_bar):
        """Test window reports filled once capacity is reached."""
        series = PriceBarSeries(3)
        assert series.add(make_bar(asset, 1.0), START) is False
        assert series.add(make_bar(asset, 2.0), START) is False
        assert series.add(make_bar(asset, 3.0), START) is True
        assert len(series) == 3

    def test_eviction(self, asset, make_bar):
        """Test oldest bar is evicted when the window is full."""
        series = PriceBarSeries(2)
        for i, close in enumerate([1.0, 2.0, 3.0]):
            series.add(make_bar(asset, close), START + timedelta(minutes=i))

        assert series.close == [2.0, 3.0]
        assert series.times == [START + timedelta(minutes=1), START + timedelta(minutes=2)]
        assert series.last.close == 3.0

    def test_increase_capacity_keeps_history(self, asset, make_bar):
        """Test growing the window keeps the bars already retained."""
        series = PriceBarSeries(2)
        series.add(make_bar(asset, 1.0), START)
        series.add(make_bar(asset, 2.0), START)

        series.increase_capacity(4)

        assert series.capacity == 4
        assert series.close == [1.0, 2.0]
        assert series.is_filled is False
        series.add(make_bar(asset, 3.0), START)
        assert series.add(make_bar(asset, 4.0), START) is True
        assert series.close == [1.0, 2.0, 3.0, 4.0]

    def test_capacity_never_shrinks(self):
        """Test smaller capacities are ignored."""
        series = PriceBarSeries(5)
        series.increase_capacity(3)
        assert series.capacity == 5

    def test_field_views(self, price_bar):
        """Test per-field lists."""
        series = PriceBarSeries(1)
        series.add(price_bar, START)
        assert series.open == [100.0]
        assert series.high == [101.0]
        assert series.low == [99.0]
        assert series.volume == [1000]

    def test_snapshot_restore(self, asset, make_bar):
        """Test restore brings back contents and capacity."""
        series = PriceBarSeries(2)
        series.add(make_bar(asset, 1.0), START)
        snapshot = series.snapshot()

        series.increase_capacity(5)
        series.add(make_bar(asset, 2.0), START)
        series.restore(snapshot)

        assert series.capacity == 2
        assert series.close == [1.0]

    def test_invalid_capacity(self):
        """Test zero capacity is rejected."""
        with pytest.raises(ValueError):
            PriceBarSeries(0)
