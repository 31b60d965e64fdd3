"""
Structured error classification for the simulation core.

Data quality errors are recoverable by the component that receives them.
System failures propagate to the caller of the run and halt it at the
offending event. Configuration errors are raised at construction time.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    ConfigurationError,
    CurrencyConversionError,
    StateTransitionError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "CurrencyConversionError",
    "StateTransitionError",
]
