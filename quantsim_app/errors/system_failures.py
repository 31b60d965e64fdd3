"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that stop a run: invalid configuration,
collaborators that cannot answer, or a corrupted runtime state.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """A component was constructed with invalid parameters."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class CurrencyConversionError(SystemFailureError):
    """No exchange rate available for a requested conversion."""

    def __init__(self, message: str, from_currency: Optional[str] = None,
                 to_currency: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.from_currency = from_currency
        self.to_currency = to_currency


class StateTransitionError(SystemFailureError):
    """Invalid buffer state transition requested by a decision rule."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition
