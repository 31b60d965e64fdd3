"""
Structured logging setup for the simulation core.

All modules log through structlog. ``configure_logging`` is called once by the
application that runs a simulation; library code only asks for loggers and
never configures output itself.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor


def _build_processors(json_output: bool, timestamps: bool, callsite: bool,
                      extra: Optional[list[Processor]]) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if callsite:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.MODULE,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    processors.extend(extra or [])

    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    return processors


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> None:
    """
    Route structlog through the standard library root logger.

    Args:
        level: Minimum level name, e.g. "DEBUG" or "WARNING"
        format_json: One JSON object per line instead of console output.
            Use for runs whose logs are collected by another process.
        include_timestamp: Add a UTC ISO-8601 ``timestamp`` key
        include_caller: Add module name and line number of the log call
        extra_processors: Inserted just before the renderer
    """
    logging.basicConfig(
        level=logging.getLevelName(level.upper()),
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=_build_processors(format_json, include_timestamp, include_caller, extra_processors),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """Logger for price window lifecycle records of the strategy runtime."""
    return get_logger(name).bind(subsystem="strategy_runtime")


def log_state_transition(
    logger: FilteringBoundLogger,
    asset: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Record a FILLING/FILLED change of one asset's price window.

    Args:
        logger: Usually the logger from get_state_logger
        asset: Asset whose window changed state
        from_state: Previous BufferState value
        to_state: New BufferState value
        trigger: Short reason, e.g. "window_filled" or "insufficient_history"
        context: Window size and capacity at the time of the change
    """
    fields: dict[str, Any] = {"asset": asset, "from_state": from_state, "to_state": to_state,
                              "trigger": trigger}
    if context:
        fields["context"] = context
    logger.info("State transition", **fields)


def log_capacity_change(
    logger: FilteringBoundLogger,
    asset: str,
    old_capacity: int,
    new_capacity: int,
    required: int
) -> None:
    """Record growth of a price window after a rule asked for more history."""
    logger.info(
        "Increased window capacity",
        asset=asset,
        old_capacity=old_capacity,
        new_capacity=new_capacity,
        required=required,
    )
