#!/usr/bin/env python3
"""
Basic Usage Example - quantsim simulation core

This script runs two strategies over a synthetic price path and shows how to:
- Build an engine from the configuration file
- Feed events through strategies and the resolver
- Fill trades at spread-adjusted prices
- Read buying power and journal metrics

Run: python examples/basic_usage.py
"""

import math
from datetime import datetime, timedelta, timezone

from quantsim_app.data.models import Asset, Event, PriceBar
from quantsim_app.engine import SimulationEngine
from quantsim_app.journals import AccountMetric, MemoryJournal, ProgressMetric
from quantsim_app.logging.config import configure_logging
from quantsim_app.state.runtime import StrategyRuntime


def create_events(asset: Asset, count: int):
    """Sine wave around 100 with a slow upward drift, one bar per minute."""
    start = datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)
    for i in range(count):
        close = 100.0 + 0.05 * i + 5.0 * math.sin(i / 8.0)
        bar = PriceBar(asset, close - 0.2, close + 0.5, close - 0.5, close, 1000)
        yield Event.of(start + timedelta(minutes=i), bar)


def main():
    configure_logging(level="INFO", format_json=False)

    asset = Asset("AAPL")
    strategies = [
        StrategyRuntime.breakout(entry_period=20, exit_period=10),
        StrategyRuntime.macd(),
    ]
    journal = MemoryJournal(ProgressMetric(), AccountMetric())
    engine = SimulationEngine.from_config(strategies, journal=journal)

    for event in create_events(asset, 200):
        for signal in engine.process_event(event):
            position = engine.account.positions.get(asset)
            held = position.size if position else 0.0
            if signal.is_buy and held <= 0 and signal.entry:
                price = engine.fill(asset, 100 - held, event)
                print(f"{event.time:%H:%M} BUY  at {price:.2f}")
            elif signal.is_sell and held > 0 and signal.exit:
                price = engine.fill(asset, -held, event)
                print(f"{event.time:%H:%M} SELL at {price:.2f}")

    print(f"\nEvents processed: {engine.total_events}")
    print(f"Window capacity: {[s.capacity(asset) for s in strategies]}")
    print(f"Buying power: {engine.account.buying_power}")
    print(f"Walltime: {journal.get_metric('progress.walltime')[-1][1]:.1f} ms")
    journal.close()


if __name__ == "__main__":
    main()
