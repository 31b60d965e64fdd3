"""Strategies and the decision rules they evaluate."""

from .base import SignalRule, Strategy
from .rules import BreakoutRule, MacdCrossoverRule, SuperTrendRule

__all__ = [
    "Strategy",
    "SignalRule",
    "BreakoutRule",
    "MacdCrossoverRule",
    "SuperTrendRule",
]
