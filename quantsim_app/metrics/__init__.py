"""Technical indicator library used by the decision rules"""

from .indicators import atr, ema, macd, natr, record_high, record_low, sma, true_range

__all__ = [
    "atr",
    "ema",
    "macd",
    "natr",
    "record_high",
    "record_low",
    "sma",
    "true_range",
]
