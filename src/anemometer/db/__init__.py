"""Database connectivity for monitors."""

from anemometer.db.session import build_database_url, create_connection

__all__ = ["build_database_url", "create_connection"]
