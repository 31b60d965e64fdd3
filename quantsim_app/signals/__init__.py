"""Trading signals and the policies that resolve conflicting signals."""

from .models import Rating, Signal, SignalType
from .resolver import (
    average_signals,
    first_signals,
    get_resolver,
    last_signals,
    no_resolver,
    sum_signals,
)

__all__ = [
    "Rating",
    "Signal",
    "SignalType",
    "sum_signals",
    "average_signals",
    "first_signals",
    "last_signals",
    "no_resolver",
    "get_resolver",
]
