"""
Main simulation engine coordinator.

Orchestrates the per-event pipeline: strategies generate raw signals, a
resolver policy reduces them to one signal per asset, positions are marked to
market, the account model recomputes buying power and the journal records the
result.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .accounts.account_model import AccountModel, CashAccount
from .accounts.models import Account, Amount, Wallet
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import Asset, Event
from .data.validators import validate_event_order
from .errors import ConfigurationError
from .journals.journal import MetricsJournal
from .pricing.engine import NoCostPricingEngine, PricingEngine, SpreadPricingEngine
from .signals.models import Signal
from .signals.resolver import SignalResolver, get_resolver, last_signals
from .state.runtime import RuleFunction, StrategyRuntime
from .strategies.base import SignalRule, Strategy

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunSummary:
    """Totals of a completed run."""
    events: int
    signals: int
    last_time: Optional[datetime]
    buying_power: Amount


class SimulationEngine:
    """
    Coordinator for the simulation core.

    Manages the evaluation pipeline:
    Event → Strategies → Resolver → Mark to market → Account model → Journal

    Each event is applied completely or not at all: if any step fails, the
    strategies and the account are restored to their state after the previous
    event and the error propagates to the caller.
    """

    def __init__(
        self,
        strategies: Iterable[Strategy],
        account: Optional[Account] = None,
        account_model: Optional[AccountModel] = None,
        pricing_engine: Optional[PricingEngine] = None,
        resolver: SignalResolver = last_signals,
        journal: Optional[MetricsJournal] = None,
    ) -> None:
        self.logger = logger
        self.strategies = list(strategies)
        self.account = account or Account()
        self.account_model = account_model or CashAccount()
        self.pricing_engine = pricing_engine or NoCostPricingEngine()
        self.resolver = resolver
        self.journal = journal

        self.last_time: Optional[datetime] = None
        self.total_events = 0
        self.total_signals = 0

    @classmethod
    def from_config(
        cls,
        strategies: Iterable[Union[Strategy, SignalRule, RuleFunction]],
        config_dir: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None,
        journal: Optional[MetricsJournal] = None,
    ) -> "SimulationEngine":
        """
        Build an engine from merged configuration.

        Strategies may be given as decision rules (SignalRule instances or
        plain functions); those are wrapped in a StrategyRuntime that starts
        with the configured ``strategy.initial_capacity``.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        config = ConfigLoader.create(config_dir).merge_config(overrides)
        errors = ConfigValidator.validate_config(config)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            logger.error("Configuration validation failed", errors=error_msgs)
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(error_msgs),
                field=errors[0].field,
                value=errors[0].value,
            )

        pricing = config["pricing"]
        if pricing["model"] == "nocost":
            pricing_engine: PricingEngine = NoCostPricingEngine(pricing["price_type"])
        else:
            pricing_engine = SpreadPricingEngine(pricing["spread_bips"], pricing["price_type"])

        account_cfg = config["account"]
        base_currency = account_cfg["base_currency"]
        account = Account(
            base_currency=base_currency,
            cash=Wallet(Amount(base_currency, float(account_cfg["initial_cash"]))),
        )

        initial_capacity = config["strategy"]["initial_capacity"]
        runtimes = [
            item if isinstance(item, Strategy) else StrategyRuntime(item, initial_capacity=initial_capacity)
            for item in strategies
        ]

        return cls(
            strategies=runtimes,
            account=account,
            account_model=CashAccount(minimum=account_cfg["minimum"]),
            pricing_engine=pricing_engine,
            resolver=get_resolver(config["resolver"]["policy"]),
            journal=journal,
        )

    def process_event(self, event: Event) -> list[Signal]:
        """
        Process a single event through the full pipeline.

        Returns:
            Resolved signals, at most one per asset
        """
        validate_event_order(event, self.last_time)

        account_checkpoint = self._checkpoint_account()
        applied: list[Strategy] = []

        try:
            raw_signals: list[Signal] = []
            for strategy in self.strategies:
                raw_signals.extend(strategy.generate(event))
                applied.append(strategy)

            signals = self.resolver(raw_signals)

            prices = {asset: bar.get_price() for asset, bar in event.prices.items()}
            self.account.mark_to_market(prices, event.time)
            self.account_model.update_account(self.account)

            if self.journal is not None:
                self.journal.track(event, self.account, signals, [])

        except Exception as e:
            for strategy in applied:
                strategy.undo_last()
            self._restore_account(account_checkpoint)
            self.logger.error(
                "Event processing failed, run halted",
                time=event.time.isoformat(),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        self.last_time = event.time
        self.total_events += 1
        self.total_signals += len(signals)
        return signals

    def run(self, events: Iterable[Event]) -> RunSummary:
        """Process events in order until the source is exhausted."""
        self.logger.info(
            "Starting simulation run",
            strategies=len(self.strategies),
            pricing_engine=repr(self.pricing_engine),
            account_model=repr(self.account_model),
        )

        for event in events:
            self.process_event(event)

        summary = RunSummary(
            events=self.total_events,
            signals=self.total_signals,
            last_time=self.last_time,
            buying_power=self.account.buying_power,
        )
        self.logger.info(
            "Simulation run finished",
            events=summary.events,
            signals=summary.signals,
            buying_power=summary.buying_power.value,
        )
        return summary

    def quote(self, asset: Asset, size: float, event: Event) -> float:
        """Execution price for trading ``size`` units of an asset in an event."""
        bar = event.prices.get(asset)
        if bar is None:
            raise KeyError(f"No price for {asset} at {event.time.isoformat()}")
        return self.pricing_engine.get_pricing(bar, event.time).market_price(size)

    def fill(self, asset: Asset, size: float, event: Event) -> float:
        """
        Execute a market trade at the quoted price, settle it on the account
        and recompute buying power. If buying power cannot be computed the
        account is restored and the error propagates.

        Returns:
            The execution price
        """
        if size == 0:
            raise ValueError("Cannot fill a zero size trade")

        price = self.quote(asset, size, event)
        checkpoint = self._checkpoint_account()
        try:
            self.account.apply_trade(asset, size, price, event.time)
            self.account_model.update_account(self.account)
        except Exception:
            self._restore_account(checkpoint)
            raise

        self.logger.debug("Filled trade", asset=str(asset), size=size, price=price)
        return price

    def reset(self) -> None:
        """Clear strategy and journal state between independent runs."""
        for strategy in self.strategies:
            strategy.reset()
        if self.journal is not None:
            self.journal.reset()
        self.last_time = None
        self.total_events = 0
        self.total_signals = 0

    def _checkpoint_account(self) -> tuple:
        positions = {asset: replace(position) for asset, position in self.account.positions.items()}
        return self.account.last_update, self.account.buying_power, self.account.cash.copy(), positions

    def _restore_account(self, checkpoint: tuple) -> None:
        last_update, buying_power, cash, positions = checkpoint
        self.account.last_update = last_update
        self.account.buying_power = buying_power
        self.account.cash = cash
        self.account.positions.clear()
        self.account.positions.update(positions)
