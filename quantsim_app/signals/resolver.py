"""
Signal resolver policies.

A resolver is a pure function ``list[Signal] -> list[Signal]`` that groups
signals by asset and returns at most one signal per asset. The ``"none"``
policy is the exception: it does not resolve at all and passes duplicates
through to the caller. Groups appear in the order their asset was first
seen.
"""

import math
from typing import Callable

from ..data.models import Asset
from ..errors import ConfigurationError
from .models import Signal, SignalType

SignalResolver = Callable[[list[Signal]], list[Signal]]


def _group_by_asset(signals: list[Signal]) -> dict[Asset, list[Signal]]:
    groups: dict[Asset, list[Signal]] = {}
    for signal in signals:
        groups.setdefault(signal.asset, []).append(signal)
    return groups


def _is_zero(rating: float) -> bool:
    return math.isclose(rating, 0.0, abs_tol=1e-12)


def _common_type(signals: list[Signal]) -> SignalType:
    types = {signal.type for signal in signals}
    return types.pop() if len(types) == 1 else SignalType.BOTH


def sum_signals(signals: list[Signal]) -> list[Signal]:
    """Sum the ratings per asset, dropping assets whose sum is zero."""
    result = []
    for asset, group in _group_by_asset(signals).items():
        rating = math.fsum(signal.rating for signal in group)
        if not _is_zero(rating):
            result.append(Signal(asset, rating, _common_type(group)))
    return result


def average_signals(signals: list[Signal]) -> list[Signal]:
    """Average the ratings per asset, dropping assets whose average is zero."""
    result = []
    for asset, group in _group_by_asset(signals).items():
        rating = math.fsum(signal.rating for signal in group) / len(group)
        if not _is_zero(rating):
            result.append(Signal(asset, rating, _common_type(group)))
    return result


def first_signals(signals: list[Signal]) -> list[Signal]:
    """Keep the first signal seen for each asset."""
    return [group[0] for group in _group_by_asset(signals).values()]


def last_signals(signals: list[Signal]) -> list[Signal]:
    """Keep the last signal seen for each asset."""
    return [group[-1] for group in _group_by_asset(signals).values()]


def no_resolver(signals: list[Signal]) -> list[Signal]:
    """
    Pass signals through unchanged, duplicates included.

    Not a resolver in the one-signal-per-asset sense; for callers that size
    orders from every raw signal themselves.
    """
    return list(signals)


RESOLVERS: dict[str, SignalResolver] = {
    "sum": sum_signals,
    "average": average_signals,
    "first": first_signals,
    "last": last_signals,
    "none": no_resolver,
}


def get_resolver(name: str) -> SignalResolver:
    """
    Look up a resolver policy by name.

    Raises:
        ConfigurationError: If the name is not a known policy
    """
    try:
        return RESOLVERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown signal resolver '{name}', expected one of {sorted(RESOLVERS)}",
            field="resolver",
            value=name,
        ) from None
