"""
Strategy interfaces.

A Strategy turns each event into zero or more signals. A SignalRule is the
per-asset decision logic that the strategy runtime evaluates against a price
window.
"""

from abc import ABC, abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ..data.models import Asset, Event
from ..data.series import PriceBarSeries
from ..signals.models import Signal


@runtime_checkable
class SignalRule(Protocol):
    """Per-asset decision logic.

    ``evaluate`` must be a pure function of the asset and the window. It may
    raise InsufficientDataError when the window is too short.
    """

    def evaluate(self, asset: Asset, series: PriceBarSeries) -> Optional[Signal]:
        ...


class Strategy(ABC):
    """Generates signals from market events."""

    @abstractmethod
    def generate(self, event: Event) -> list[Signal]:
        """Signals for an event, typically for the assets in the event."""

    def undo_last(self) -> None:
        """Revert the state changes of the last generate() call."""

    def reset(self) -> None:
        """Clear all state between independent runs."""
