from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from anemometer.config.models import DatabaseConfig
from anemometer.core.errors import SetupError

# Configured database type -> SQLAlchemy dialect(+driver)
DIALECTS: dict[str, str] = {
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
    "sqlite3": "sqlite",
    "sqlite": "sqlite",
    "vertica": "vertica+vertica_python",
    "bigquery": "bigquery",
}


def build_database_url(db_type: str, uri: str) -> URL:
    """Turn a configured database type and connection string into a SQLAlchemy URL.

    A URI that already names ``dialect+driver`` is used unchanged; otherwise the
    scheme is replaced by the dialect registered for ``db_type``. SQLite also
    accepts a bare file path or ``:memory:``.
    """

    dialect = DIALECTS.get(db_type.lower(), db_type.lower())

    if "://" not in uri:
        if dialect.startswith("sqlite"):
            return URL.create(dialect, database=uri or None)
        raise SetupError(f"invalid connection string for database type '{db_type}'")

    try:
        url = make_url(uri)
    except ArgumentError as exc:
        raise SetupError(f"invalid connection string: {exc}") from exc

    if "+" not in url.drivername:
        url = url.set(drivername=dialect)
    return url


def create_connection(database: DatabaseConfig, *, echo: bool = False) -> tuple[Engine, Connection]:
    """Open a connection for a monitor and verify it with a round trip.

    Raises:
        SetupError: If the driver is unknown or the database can't be reached
    """

    url = build_database_url(database.type, database.uri)
    options: dict = {"echo": echo, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # monitors are created on the main thread and polled from their own
        options.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)

    try:
        engine = create_engine(url, **options)
    except (ArgumentError, NoSuchModuleError, ImportError) as exc:
        raise SetupError(
            f"unsupported database type '{database.type}': {exc}", {"database_type": database.type}
        ) from exc

    try:
        connection = engine.connect()
        connection.execute(text("SELECT 1"))
        connection.rollback()
    except SQLAlchemyError as exc:
        engine.dispose()
        raise SetupError(
            f"failed to connect to database: {exc}", {"database_type": database.type}
        ) from exc

    return engine, connection
