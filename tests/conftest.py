"""Root test configuration."""

import logging
from unittest.mock import MagicMock

import pytest
import structlog
from datadog.dogstatsd import DogStatsd

from anemometer.config.models import DatabaseConfig
from anemometer.db.session import create_connection


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def statsd_client():
    """A DogStatsD stand-in that records every call."""
    return MagicMock(spec=DogStatsd)


@pytest.fixture
def sqlite_connection():
    """An open in-memory SQLite connection."""
    engine, connection = create_connection(DatabaseConfig(type="sqlite3", uri=":memory:"))
    yield connection
    connection.close()
    engine.dispose()
