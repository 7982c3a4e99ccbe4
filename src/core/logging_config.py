"""Structured logging configuration.

This module initializes structlog loggers with a stable JSON line format.
Events go to standard error so command output on standard output stays
parseable.
"""

from __future__ import annotations

from functools import lru_cache
import sys
from typing import Any, TextIO

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger(name)


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    """Return the print logger bound to the current standard error stream."""
    return _print_logger_for(sys.stderr)


@lru_cache(maxsize=1)
def _print_logger_for(stream: TextIO) -> structlog.PrintLogger:
    # One logger per stream; a replaced sys.stderr gets a fresh logger.
    return structlog.PrintLogger(file=stream)
