"""Metrics calculated once per event and recorded by a journal."""

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from ..accounts.models import Account
from ..data.models import Event
from ..signals.models import Signal


class Metric(ABC):
    """Computes named numeric values from the state after an event."""

    @abstractmethod
    def calculate(self, event: Event, account: Account, signals: list[Signal],
                  instructions: list[Any]) -> dict[str, float]:
        pass

    def reset(self) -> None:
        pass


class ProgressMetric(Metric):
    """
    Run progress: number of events, number of price items seen and wall
    time in milliseconds since the first event.
    """

    def __init__(self):
        self.events = 0
        self.actions = 0
        self._start: Optional[float] = None

    def calculate(self, event: Event, account: Account, signals: list[Signal],
                  instructions: list[Any]) -> dict[str, float]:
        now = time.monotonic()
        if self._start is None:
            self._start = now
        self.events += 1
        self.actions += len(event.items)
        return {
            "progress.events": float(self.events),
            "progress.actions": float(self.actions),
            "progress.walltime": (now - self._start) * 1000.0,
        }

    def reset(self) -> None:
        self.events = 0
        self.actions = 0
        self._start = None


class AccountMetric(Metric):
    """Buying power, base currency cash and number of open positions."""

    def calculate(self, event: Event, account: Account, signals: list[Signal],
                  instructions: list[Any]) -> dict[str, float]:
        return {
            "account.buyingpower": account.buying_power.value,
            "account.cash": account.cash.get_amount(account.base_currency).value,
            "account.positions": float(len(account.positions)),
        }
