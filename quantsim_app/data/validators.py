"""
Event stream validation.

The simulation does not reorder or buffer events. These checks turn a stream
that breaks the ordering contract into a loud failure instead of silently
wrong numbers.
"""

from datetime import datetime
from typing import Optional

from ..errors import TemporalDataError
from .models import Event


def validate_event_order(event: Event, last_time: Optional[datetime]) -> None:
    """
    Check that an event is not older than the previous one.

    Args:
        event: Event about to be processed
        last_time: Time of the last processed event, None at the start of a run

    Raises:
        TemporalDataError: If the event time is before last_time
    """
    if event.time.tzinfo is None:
        raise TemporalDataError(
            "Event time must be timezone aware",
            timestamp=event.time,
            previous_timestamp=last_time,
        )

    if last_time is not None and event.time < last_time:
        raise TemporalDataError(
            f"Out of order event: {event.time.isoformat()} < {last_time.isoformat()}",
            timestamp=event.time,
            previous_timestamp=last_time,
        )