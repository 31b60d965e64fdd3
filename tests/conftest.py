"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from quantsim_app.data.models import Asset, AssetType, Event, PriceBar


START = datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def asset() -> Asset:
    """Test stock asset quoted in USD."""
    return Asset("TEST")


@pytest.fixture
def other_asset() -> Asset:
    """Second asset for multi-asset scenarios."""
    return Asset("BTC", AssetType.CRYPTO, currency="USD")


@pytest.fixture
def price_bar(asset) -> PriceBar:
    """Sample price bar."""
    return PriceBar(asset, 100.0, 101.0, 99.0, 100.5, 1000)


def _make_bar(asset: Asset, close: float, spread: float = 1.0) -> PriceBar:
    return PriceBar(asset, close, close + spread, close - spread, close, 1000)


@pytest.fixture
def make_bar():
    """Factory for bars centred on close with a fixed high/low range."""
    return _make_bar


@pytest.fixture
def make_events():
    """Factory for one event per close, one minute apart."""
    def _make_events(asset: Asset, closes: list[float], start: datetime = START) -> list[Event]:
        return [
            Event.of(start + timedelta(minutes=i), _make_bar(asset, close))
            for i, close in enumerate(closes)
        ]
    return _make_events
