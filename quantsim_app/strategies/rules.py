"""
Technical-analysis decision rules.

Each rule evaluates one price window and returns at most one signal. Rules
never track history themselves; when the window is too short the indicator
library raises InsufficientDataError and the runtime grows the window.
"""

from dataclasses import dataclass
from typing import Optional

from ..data.models import Asset
from ..data.series import PriceBarSeries
from ..metrics.indicators import atr, macd, record_high, record_low
from ..signals.models import Rating, Signal, SignalType


@dataclass(frozen=True)
class BreakoutRule:
    """
    Breakout with separate entry and exit periods.

    A new high (low) over the entry period is a BUY (SELL) for both entry and
    exit. A new low (high) over the shorter exit period only exits.
    """
    entry_period: int = 100
    exit_period: int = 50

    def evaluate(self, asset: Asset, series: PriceBarSeries) -> Optional[Signal]:
        if record_high(series.high, self.entry_period):
            return Signal(asset, Rating.BUY, SignalType.BOTH)
        if record_low(series.low, self.entry_period):
            return Signal(asset, Rating.SELL, SignalType.BOTH)
        if record_low(series.low, self.exit_period):
            return Signal(asset, Rating.SELL, SignalType.EXIT)
        if record_high(series.high, self.exit_period):
            return Signal(asset, Rating.BUY, SignalType.EXIT)
        return None


@dataclass(frozen=True)
class MacdCrossoverRule:
    """Momentum crossover: MACD histogram changing sign between two bars."""
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9

    def evaluate(self, asset: Asset, series: PriceBarSeries) -> Optional[Signal]:
        prices = series.close
        _, _, diff = macd(prices, self.fast_period, self.slow_period, self.signal_period)
        _, _, prev_diff = macd(prices, self.fast_period, self.slow_period, self.signal_period, previous=1)
        if diff > 0.0 and prev_diff <= 0.0:
            return Signal(asset, Rating.BUY)
        if diff < 0.0 and prev_diff >= 0.0:
            return Signal(asset, Rating.SELL)
        return None


@dataclass(frozen=True)
class SuperTrendRule:
    """
    Volatility band around the bar midpoint:

        band = (high + low) / 2 +/- multiplier * ATR

    A close above the upper band is a BUY, below the lower band a SELL.
    """
    period: int = 14
    multiplier: float = 1.0

    def evaluate(self, asset: Asset, series: PriceBarSeries) -> Optional[Signal]:
        width = self.multiplier * atr(series.high, series.low, series.close, self.period)
        last = series.last
        mid = (last.high + last.low) / 2.0
        if last.close > mid + width:
            return Signal(asset, Rating.BUY)
        if last.close < mid - width:
            return Signal(asset, Rating.SELL)
        return None
