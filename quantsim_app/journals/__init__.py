"""Journals that record metrics for every processed event."""

from .journal import MemoryJournal, MetricsJournal
from .metrics import AccountMetric, Metric, ProgressMetric

__all__ = ["MetricsJournal", "MemoryJournal", "Metric", "ProgressMetric", "AccountMetric"]
