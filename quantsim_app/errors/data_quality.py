"""
Data quality error classifications for market data processing.

These exceptions describe problems with the observations flowing through the
simulation. Only InsufficientDataError is recovered from automatically (by the
strategy runtime growing its window); the others are contract violations.
"""

from datetime import datetime
from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Events delivered out of timestamp order."""

    def __init__(self, message: str, timestamp: Optional[datetime] = None,
                 previous_timestamp: Optional[datetime] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timestamp = timestamp
        self.previous_timestamp = previous_timestamp
        self.recoverable = False


class MalformedDataError(DataQualityError):
    """Observation exists but its values are not usable."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.recoverable = False


class InsufficientDataError(DataQualityError):
    """Not enough history for a calculation.

    ``required_count`` is the minimum window length the calculation needs.
    """

    def __init__(self, message: str, required_count: int = 1,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
