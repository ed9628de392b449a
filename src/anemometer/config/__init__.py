"""
Anemometer configuration.

- YAML monitor definitions (statsd endpoint plus a list of monitors)
- Pydantic-based process settings (ANEMOMETER_ environment variables)
"""

from anemometer.config.loader import read_config
from anemometer.config.models import (
    Config,
    DatabaseConfig,
    MetricType,
    MonitorConfig,
    StatsdConfig,
)
from anemometer.config.settings import Settings, get_settings

__all__ = [
    "Config",
    "DatabaseConfig",
    "MetricType",
    "MonitorConfig",
    "StatsdConfig",
    "Settings",
    "get_settings",
    "read_config",
]
