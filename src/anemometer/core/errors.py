"""
Error types and CLI error handling for Anemometer.

Errors fall into three groups:
- Setup errors (bad config, unreachable database, bad StatsD address):
  fatal, reported to the caller and never retried.
- Cycle errors (query execution failure): the monitor skips the cycle.
- Row errors (decode, conversion, dispatch, emission): the monitor skips
  the row.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Setup error (database or StatsD client could not be created)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    SETUP_ERROR = 11
    UNKNOWN_ERROR = 127


class AnemometerError(Exception):
    """Base exception for Anemometer errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AnemometerError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class SetupError(AnemometerError):
    """Raised when a monitor's database connection or StatsD client can't be created."""

    exit_code = ExitCode.SETUP_ERROR


class RowError(AnemometerError):
    """Base for failures that only affect a single result row."""


class RowDecodeError(RowError):
    """Raised when a result row can't be read into a record."""


class MetricConversionError(RowError):
    """Raised when the metric column is missing or not numeric."""


class TimestampConversionError(RowError):
    """Raised when the timestamp column can't be turned into a point in time."""


class UnknownMetricTypeError(RowError):
    """Raised when a monitor is configured with an unsupported metric type."""


class MetricEmitError(RowError):
    """Raised when the StatsD client fails to publish a metric."""


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI commands that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - AnemometerError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except AnemometerError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: AnemometerError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
