"""
Pricing engines for simulated execution.

An engine is stateless: ``get_pricing`` binds it to one price bar and one
timestamp and returns a short-lived ``Pricing`` that maps a signed trade size
(positive buys, negative sells) to an execution price.
"""

import math
from abc import ABC, abstractmethod
from datetime import datetime

from ..data.models import PRICE_TYPES, PriceBar
from ..errors import ConfigurationError


def _check_size(size: float) -> None:
    if not isinstance(size, (int, float)) or not math.isfinite(size):
        raise ValueError(f"Trade size must be a finite number, got {size!r}")


def _check_price_type(price_type: str) -> None:
    if price_type not in PRICE_TYPES:
        raise ConfigurationError(
            f"Unsupported price type '{price_type}', expected one of {sorted(PRICE_TYPES)}",
            field="price_type",
            value=price_type,
        )


class Pricing(ABC):
    """Execution prices for one bar at one moment."""

    def __init__(self, bar: PriceBar, time: datetime):
        self.bar = bar
        self.time = time

    @abstractmethod
    def market_price(self, size: float) -> float:
        """Execution price for a market order of ``size`` units."""


class PricingEngine(ABC):
    """Creates Pricing instances for price bars."""

    @abstractmethod
    def get_pricing(self, bar: PriceBar, time: datetime) -> Pricing:
        pass


class NoCostPricing(Pricing):

    def __init__(self, bar: PriceBar, time: datetime, price_type: str):
        super().__init__(bar, time)
        self.price = bar.get_price(price_type)

    def market_price(self, size: float) -> float:
        _check_size(size)
        return self.price


class NoCostPricingEngine(PricingEngine):
    """
    Frictionless pricing: every trade executes at the reference price,
    whatever its direction or size.
    """

    def __init__(self, price_type: str = "DEFAULT"):
        _check_price_type(price_type)
        self.price_type = price_type

    def get_pricing(self, bar: PriceBar, time: datetime) -> Pricing:
        return NoCostPricing(bar, time, self.price_type)

    def __repr__(self) -> str:
        return f"NoCostPricingEngine(price_type={self.price_type!r})"


class SpreadPricing(Pricing):

    def __init__(self, bar: PriceBar, time: datetime, spread: float, price_type: str):
        super().__init__(bar, time)
        self.price = bar.get_price(price_type)
        self.half_spread = spread / 2.0

    def market_price(self, size: float) -> float:
        _check_size(size)
        if size > 0:
            return self.price * (1.0 + self.half_spread)
        if size < 0:
            return self.price * (1.0 - self.half_spread)
        # Zero size has no direction, quote the reference price
        return self.price


class SpreadPricingEngine(PricingEngine):
    """
    Pricing with a fixed spread, split evenly around the reference price.

    Buys pay half the spread above the reference price and sells receive half
    the spread below it, so a buy followed by a sell of the same size costs the
    full spread.

    Args:
        spread_bips: Full spread in basis points (1 bip = 0.01%)
        price_type: Which price of the bar to use as reference
    """

    def __init__(self, spread_bips: float = 10.0, price_type: str = "DEFAULT"):
        if not isinstance(spread_bips, (int, float)) or not math.isfinite(spread_bips) or spread_bips < 0:
            raise ConfigurationError(
                "Spread must be a non-negative number of basis points",
                field="spread_bips",
                value=spread_bips,
            )
        _check_price_type(price_type)
        self.spread_bips = spread_bips
        self.spread = spread_bips / 10_000.0
        self.price_type = price_type

    def get_pricing(self, bar: PriceBar, time: datetime) -> Pricing:
        return SpreadPricing(bar, time, self.spread, self.price_type)

    def __repr__(self) -> str:
        return f"SpreadPricingEngine(spread_bips={self.spread_bips}, price_type={self.price_type!r})"
