"""
Strategy runtime with adaptive per-asset price windows.

The runtime keeps one price window per asset and evaluates a decision rule
against it once the window is filled. A rule that needs more history than the
window holds raises InsufficientDataError; the runtime turns that into a
typed EvaluationResult, grows the window and waits for it to fill again.
Already retained bars are kept, so the window catches up instead of
restarting from empty.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Optional, Union

import structlog

from ..data.models import Asset, Event, PriceBar
from ..data.series import PriceBarSeries
from ..errors import ConfigurationError, InsufficientDataError, StateTransitionError
from ..logging.config import get_state_logger, log_capacity_change, log_state_transition
from ..signals.models import Signal
from ..strategies.base import SignalRule, Strategy
from ..strategies.rules import BreakoutRule, MacdCrossoverRule, SuperTrendRule
from .models import AssetBuffer, BufferCheckpoint, BufferState, EvaluationResult

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)

RuleFunction = Callable[[Asset, PriceBarSeries], Optional[Signal]]


class StrategyRuntime(Strategy):
    """
    Drives a decision rule over per-asset price windows.

    Args:
        rule: SignalRule instance or plain function ``(asset, series) -> Signal | None``
        initial_capacity: Window length each asset starts with. The rule is only
            called once this many bars are available.
    """

    def __init__(self, rule: Union[SignalRule, RuleFunction], initial_capacity: int = 1):
        if not isinstance(initial_capacity, int) or initial_capacity < 1:
            raise ConfigurationError(
                "Initial capacity must be a positive integer",
                field="initial_capacity",
                value=initial_capacity,
            )
        self.rule = rule
        self.initial_capacity = initial_capacity
        self._evaluate_fn: RuleFunction = rule.evaluate if isinstance(rule, SignalRule) else rule
        self.buffers: dict[Asset, AssetBuffer] = {}
        self._last_checkpoints: dict[Asset, Optional[BufferCheckpoint]] = {}

    @classmethod
    def breakout(cls, entry_period: int = 100, exit_period: int = 50) -> "StrategyRuntime":
        return cls(BreakoutRule(entry_period, exit_period))

    @classmethod
    def macd(cls, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9) -> "StrategyRuntime":
        return cls(MacdCrossoverRule(fast_period, slow_period, signal_period))

    @classmethod
    def super_trend(cls, period: int = 14, multiplier: float = 1.0) -> "StrategyRuntime":
        return cls(SuperTrendRule(period, multiplier))

    def generate(self, event: Event) -> list[Signal]:
        """
        Add the price bars of an event to their windows and evaluate the rule
        for every window that is filled.

        Either the whole event is applied or, if the rule fails with anything
        other than insufficient history, all windows are restored to their
        state before the event and the error propagates.
        """
        signals: list[Signal] = []
        checkpoints: dict[Asset, Optional[BufferCheckpoint]] = {}

        try:
            for asset, bar in event.prices.items():
                if not isinstance(bar, PriceBar):
                    continue

                buffer = self.buffers.get(asset)
                if asset not in checkpoints:
                    checkpoints[asset] = BufferCheckpoint.of(buffer) if buffer else None
                if buffer is None:
                    buffer = AssetBuffer.create(self.initial_capacity)
                    self.buffers[asset] = buffer

                signal = self._process_bar(asset, buffer, bar, event.time)
                if signal is not None:
                    signals.append(signal)

        except Exception:
            self._rollback(checkpoints)
            raise

        self._last_checkpoints = checkpoints
        return signals

    def _process_bar(self, asset: Asset, buffer: AssetBuffer, bar: PriceBar,
                     time: datetime) -> Optional[Signal]:
        if not buffer.series.add(bar, time):
            buffer.state = BufferState.FILLING
            return None

        self._transition(asset, buffer, BufferState.FILLED, trigger="window_filled")
        result = self._evaluate(asset, buffer)

        if result.needs_more_history:
            self._grow(asset, buffer, result.required_capacity)
            return None

        return result.signal

    def _evaluate(self, asset: Asset, buffer: AssetBuffer) -> EvaluationResult:
        buffer.evaluations += 1
        try:
            signal = self._evaluate_fn(asset, buffer.series)
        except InsufficientDataError as ex:
            return EvaluationResult(required_capacity=ex.required_count)
        return EvaluationResult(signal=signal)

    def _grow(self, asset: Asset, buffer: AssetBuffer, required: int) -> None:
        old_capacity = buffer.capacity
        if not isinstance(required, int) or required <= old_capacity:
            raise StateTransitionError(
                f"Rule for {asset} asked for {required} bars with a filled window of {old_capacity}",
                current_state=buffer.state.value,
                attempted_transition=BufferState.FILLING.value,
                context={"asset": str(asset), "required": required, "capacity": old_capacity},
            )

        buffer.series.increase_capacity(required)
        log_capacity_change(state_logger, str(asset), old_capacity, buffer.capacity, required)
        self._transition(asset, buffer, BufferState.FILLING, trigger="insufficient_history")

    def _transition(self, asset: Asset, buffer: AssetBuffer, new_state: BufferState, trigger: str) -> None:
        if buffer.state == new_state:
            return
        log_state_transition(
            state_logger,
            asset=str(asset),
            from_state=buffer.state.value,
            to_state=new_state.value,
            trigger=trigger,
            context={"size": len(buffer.series), "capacity": buffer.capacity},
        )
        buffer.state = new_state

    def _rollback(self, checkpoints: dict[Asset, Optional[BufferCheckpoint]]) -> None:
        for asset, checkpoint in checkpoints.items():
            if checkpoint is None:
                self.buffers.pop(asset, None)
            else:
                checkpoint.restore(self.buffers[asset])
        logger.warning("Rolled back price windows", assets=len(checkpoints))

    def undo_last(self) -> None:
        """Restore all windows to their state before the last event."""
        self._rollback(self._last_checkpoints)
        self._last_checkpoints = {}

    def capacity(self, asset: Asset) -> int:
        """Current window capacity for an asset."""
        buffer = self.buffers.get(asset)
        return buffer.capacity if buffer else self.initial_capacity

    def state(self, asset: Asset) -> BufferState:
        buffer = self.buffers.get(asset)
        return buffer.state if buffer else BufferState.FILLING

    def reset(self) -> None:
        """Drop all windows; every asset starts again at the initial capacity."""
        self.buffers.clear()
        self._last_checkpoints = {}

    def __repr__(self) -> str:
        return f"StrategyRuntime(rule={self.rule!r}, initial_capacity={self.initial_capacity})"
