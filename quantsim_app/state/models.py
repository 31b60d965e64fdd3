"""
Runtime data models for per-asset price windows.

Each asset tracked by a strategy runtime owns one window record. The record
moves between FILLING and FILLED as observations arrive and as decision rules
ask for more history.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..data.series import PriceBarSeries
from ..signals.models import Signal


class BufferState(str, Enum):
    """Lifecycle of a per-asset price window."""
    FILLING = "filling"
    FILLED = "filled"


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating a decision rule against one window."""

    signal: Optional[Signal] = None
    required_capacity: Optional[int] = None   # Set when the rule needs more history

    @property
    def needs_more_history(self) -> bool:
        return self.required_capacity is not None


@dataclass
class AssetBuffer:
    """Price window and state for a single asset, owned by the runtime."""

    series: PriceBarSeries
    state: BufferState = BufferState.FILLING
    evaluations: int = 0                       # Number of rule invocations

    @classmethod
    def create(cls, capacity: int) -> "AssetBuffer":
        return cls(series=PriceBarSeries(capacity))

    @property
    def capacity(self) -> int:
        return self.series.capacity


@dataclass(frozen=True)
class BufferCheckpoint:
    """Copy of an AssetBuffer taken before an event is applied."""

    window: tuple = field(default_factory=tuple)
    state: BufferState = BufferState.FILLING
    evaluations: int = 0

    @classmethod
    def of(cls, buffer: AssetBuffer) -> "BufferCheckpoint":
        return cls(window=buffer.series.snapshot(), state=buffer.state, evaluations=buffer.evaluations)

    def restore(self, buffer: AssetBuffer) -> None:
        buffer.series.restore(self.window)
        buffer.state = self.state
        buffer.evaluations = self.evaluations
