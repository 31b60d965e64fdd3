"""
Canonical data models for market observations.

This module defines immutable data structures that represent the assets and
price bars delivered by a data feed, and the timestamped events that bundle
them for the simulation.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..errors import MalformedDataError


class AssetType(str, Enum):
    """Supported asset classes."""
    STOCK = "stock"
    CRYPTO = "crypto"
    FOREX = "forex"
    FUTURES = "futures"


PRICE_TYPES = frozenset({"DEFAULT", "OPEN", "HIGH", "LOW", "CLOSE", "TYPICAL"})


@dataclass(frozen=True)
class Asset:
    """Tradable asset identifier, used as a map key."""
    symbol: str
    asset_type: AssetType = AssetType.STOCK
    currency: str = "USD"
    multiplier: float = 1.0

    def __str__(self) -> str:
        return f"{self.symbol}/{self.asset_type.value}"


@dataclass(frozen=True)
class PriceBar:
    """OHLCV observation for one asset at one instant."""
    asset: Asset
    open: float
    high: float
    low: float
    close: float
    volume: float = float("nan")

    def __post_init__(self):
        for name in ("open", "high", "low", "close"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise MalformedDataError(
                    f"Price bar {name} must be a finite number",
                    field=name,
                    value=value,
                    context={"asset": str(self.asset)},
                )
        if self.high < self.low:
            raise MalformedDataError(
                "Price bar high is below low",
                field="high",
                value=self.high,
                context={"asset": str(self.asset), "low": self.low},
            )

    def get_price(self, price_type: str = "DEFAULT") -> float:
        """
        Return the price of this bar for a price type.

        DEFAULT maps to the close, TYPICAL to (high + low + close) / 3.
        """
        if price_type in ("DEFAULT", "CLOSE"):
            return self.close
        if price_type == "OPEN":
            return self.open
        if price_type == "HIGH":
            return self.high
        if price_type == "LOW":
            return self.low
        if price_type == "TYPICAL":
            return (self.high + self.low + self.close) / 3.0
        raise ValueError(f"Unsupported price type: {price_type}")


@dataclass(frozen=True)
class Event:
    """All price observations that happened at the same market time."""
    time: datetime
    prices: dict[Asset, PriceBar] = field(default_factory=dict)

    @classmethod
    def of(cls, time: datetime, *bars: PriceBar) -> "Event":
        """Create an event from a sequence of bars, keyed by their asset."""
        return cls(time=time, prices={bar.asset: bar for bar in bars})

    def get_price(self, asset: Asset, price_type: str = "DEFAULT"):
        """Price for an asset in this event, None if the asset is absent."""
        bar = self.prices.get(asset)
        return bar.get_price(price_type) if bar is not None else None

    @property
    def items(self) -> list[PriceBar]:
        return list(self.prices.values())
