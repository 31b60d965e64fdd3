"""
Metrics journals.

A journal receives the outcome of every processed event and records the
values of its metrics. Journals are explicit objects owned by whoever runs
the simulation; there is no process-wide registry.
"""

import copy
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

import structlog

from ..accounts.models import Account
from ..data.models import Event
from ..signals.models import Signal
from .metrics import Metric

logger = structlog.get_logger(__name__)


class MetricsJournal(ABC):
    """Sink for per-event results."""

    @abstractmethod
    def track(self, event: Event, account: Account, signals: list[Signal],
              instructions: list[Any]) -> None:
        pass

    @abstractmethod
    def get_metric(self, name: str) -> list[tuple[datetime, float]]:
        pass

    @abstractmethod
    def get_metric_names(self) -> set[str]:
        pass

    def reset(self) -> None:
        pass

    def close(self) -> None:
        pass


class MemoryJournal(MetricsJournal):
    """
    Keeps all metric observations in memory, per metric name.

    An event is recorded for all metrics or for none: if one metric raises,
    the state of every metric is restored and nothing is added to the history.
    """

    def __init__(self, *metrics: Metric):
        self.metrics = list(metrics)
        self._history: dict[str, list[tuple[datetime, float]]] = {}
        self._closed = False

    def track(self, event: Event, account: Account, signals: list[Signal],
              instructions: list[Any]) -> None:
        if self._closed:
            raise RuntimeError("Journal is closed")

        # Metrics keep running state, restored if any of them fails
        saved = [copy.copy(metric) for metric in self.metrics]
        result: dict[str, float] = {}
        try:
            for metric in self.metrics:
                result.update(metric.calculate(event, account, signals, instructions))
        except Exception:
            for metric, state in zip(self.metrics, saved):
                metric.__dict__.update(state.__dict__)
            raise

        for name, value in result.items():
            self._history.setdefault(name, []).append((event.time, value))

    def get_metric(self, name: str) -> list[tuple[datetime, float]]:
        return list(self._history.get(name, []))

    def get_metric_names(self) -> set[str]:
        return set(self._history)

    def reset(self) -> None:
        self._history.clear()
        for metric in self.metrics:
            metric.reset()

    def close(self) -> None:
        self._closed = True
        logger.info("Closed journal", metrics=sorted(self._history))
