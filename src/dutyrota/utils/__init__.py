"""Shared helpers: calendar arithmetic and logging."""
from .logging_setup import (
    TRACE,
    PassLogger,
    get_logger,
    level_for_verbosity,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "level_for_verbosity",
    "log_function_call",
    "PassLogger",
    "TRACE",
]
