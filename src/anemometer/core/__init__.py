"""Core building blocks shared across Anemometer."""

from anemometer.core.errors import (
    AnemometerError,
    ConfigurationError,
    ExitCode,
    MetricConversionError,
    MetricEmitError,
    RowDecodeError,
    RowError,
    SetupError,
    TimestampConversionError,
    UnknownMetricTypeError,
    main_with_error_handling,
)

__all__ = [
    "AnemometerError",
    "ConfigurationError",
    "ExitCode",
    "MetricConversionError",
    "MetricEmitError",
    "RowDecodeError",
    "RowError",
    "SetupError",
    "TimestampConversionError",
    "UnknownMetricTypeError",
    "main_with_error_handling",
]
