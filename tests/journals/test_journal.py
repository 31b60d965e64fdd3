"""Tests for metrics and journals"""

from datetime import timedelta

import pytest

from quantsim_app.accounts.models import Account, Amount, Wallet
from quantsim_app.data.models import Event
from quantsim_app.journals import AccountMetric, MemoryJournal, Metric, ProgressMetric


class TestProgressMetric:
    """Test run progress metric"""

    def test_keys(self, asset, make_events):
        """Test the metric reports events, actions and walltime"""
        metric = ProgressMetric()
        event = make_events(asset, [100.0])[0]
        result = metric.calculate(event, Account(), [], [])
        assert set(result) == {"progress.events", "progress.actions", "progress.walltime"}
        assert result["progress.events"] == 1.0
        assert result["progress.actions"] == 1.0
        assert result["progress.walltime"] >= 0.0

    def test_cumulative(self, asset, other_asset, make_bar, make_events):
        """Test counts accumulate over events"""
        metric = ProgressMetric()
        first = make_events(asset, [100.0])[0]
        second = Event.of(first.time + timedelta(minutes=1),
                          make_bar(asset, 101.0), make_bar(other_asset, 50.0))

        metric.calculate(first, Account(), [], [])
        result = metric.calculate(second, Account(), [], [])

        assert result["progress.events"] == 2.0
        assert result["progress.actions"] == 3.0

    def test_reset(self, asset, make_events):
        """Test reset starts counting from zero"""
        metric = ProgressMetric()
        event = make_events(asset, [100.0])[0]
        metric.calculate(event, Account(), [], [])
        metric.reset()
        assert metric.calculate(event, Account(), [], [])["progress.events"] == 1.0


class TestAccountMetric:
    """Test account metric"""

    def test_values(self, asset, make_events):
        """Test buying power, cash and positions"""
        event = make_events(asset, [100.0])[0]
        account = Account(cash=Wallet(Amount("USD", 5000.0)), buying_power=Amount("USD", 4000.0))
        account.apply_trade(asset, 10, 100.0, event.time)

        result = AccountMetric().calculate(event, account, [], [])

        assert result == {
            "account.buyingpower": 4000.0,
            "account.cash": 4000.0,
            "account.positions": 1.0,
        }


class TestMemoryJournal:
    """Test in-memory journal"""

    def test_track_records_history(self, asset, make_events):
        """Test one observation per metric per event"""
        journal = MemoryJournal(ProgressMetric(), AccountMetric())
        events = make_events(asset, [100.0, 101.0, 102.0])
        for event in events:
            journal.track(event, Account(), [], [])

        assert journal.get_metric_names() == {
            "progress.events", "progress.actions", "progress.walltime",
            "account.buyingpower", "account.cash", "account.positions",
        }
        assert journal.get_metric("progress.events") == [
            (events[0].time, 1.0), (events[1].time, 2.0), (events[2].time, 3.0)
        ]

    def test_unknown_metric(self):
        """Test unknown metric names return no observations"""
        assert MemoryJournal(ProgressMetric()).get_metric("missing") == []

    def test_reset(self, asset, make_events):
        """Test reset clears history and metric state"""
        journal = MemoryJournal(ProgressMetric())
        event = make_events(asset, [100.0])[0]
        journal.track(event, Account(), [], [])
        journal.reset()

        assert journal.get_metric_names() == set()
        journal.track(event, Account(), [], [])
        assert journal.get_metric("progress.events") == [(event.time, 1.0)]

    def test_failing_metric_records_nothing(self, asset, make_events):
        """Test a metric failure rolls back the other metrics of the event"""
        class FailingMetric(Metric):
            def __init__(self):
                self.fail = True

            def calculate(self, event, account, signals, instructions):
                if self.fail:
                    raise ValueError("metric failure")
                return {"failing.ok": 1.0}

        progress = ProgressMetric()
        failing = FailingMetric()
        journal = MemoryJournal(progress, failing)
        first, second = make_events(asset, [100.0, 101.0])

        with pytest.raises(ValueError):
            journal.track(first, Account(), [], [])
        assert progress.events == 0
        assert progress.actions == 0
        assert journal.get_metric_names() == set()

        failing.fail = False
        journal.track(second, Account(), [], [])
        assert journal.get_metric("progress.events") == [(second.time, 1.0)]

    def test_closed_journal_rejects_events(self, asset, make_events):
        """Test tracking after close fails"""
        journal = MemoryJournal(ProgressMetric())
        journal.close()
        with pytest.raises(RuntimeError):
            journal.track(make_events(asset, [100.0])[0], Account(), [], [])
