"""
Logging configuration and utilities for the quantsim simulation core.
"""
from .config import configure_logging, get_logger, get_state_logger

__all__ = ["configure_logging", "get_logger", "get_state_logger"]
