"""
Monitor execution loop.

A Monitor owns one database connection and one StatsD client. Every cycle it
sleeps, runs its query and publishes one metric per result row. Query
failures skip the cycle and row failures skip the row; both publish the
``anemometer.error`` gauge so a broken monitor can be alerted on.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from anemometer.config.models import MonitorConfig, StatsdConfig
from anemometer.core.errors import RowError
from anemometer.db.session import create_connection
from anemometer.monitor.coercion import get_metric_float, get_timestamp
from anemometer.monitor.dispatch import MetricDispatcher
from anemometer.monitor.rows import decode_row
from anemometer.monitor.statsd import create_statsd_client, send_error_metric
from anemometer.monitor.tags import get_tags

logger = structlog.get_logger()


@dataclass
class CycleResult:
    """Outcome of a single poll cycle."""

    rows: int = 0
    emitted: int = 0
    failed: int = 0
    query_failed: bool = False


class Monitor:
    """Runs a query on an interval and pushes the results to StatsD as metrics/tags."""

    def __init__(
        self,
        *,
        name: str,
        connection: Connection,
        statsd_client: Any,
        sleep_duration: int,
        metric: str,
        metric_type: str,
        sql: str,
        engine: Engine | None = None,
        debug: bool = False,
    ) -> None:
        self.name = name
        self.connection = connection.execution_options(no_parameters=True)
        self.statsd_client = statsd_client
        self.sleep_duration = sleep_duration
        self.metric = metric
        self.metric_type = metric_type
        self.sql = sql
        self.engine = engine
        self.debug = debug
        self.dispatcher = MetricDispatcher(statsd_client)
        self.log = logger.bind(monitor=name)

    @classmethod
    def create(
        cls,
        statsd_config: StatsdConfig,
        monitor_config: MonitorConfig,
        *,
        debug: bool = False,
    ) -> Monitor:
        """
        Build a monitor from configuration, opening its connection and client.

        Raises:
            SetupError: If the database or StatsD client can't be set up
        """
        engine, connection = create_connection(monitor_config.database)
        try:
            statsd_client = create_statsd_client(statsd_config)
        except Exception:
            connection.close()
            engine.dispose()
            raise

        return cls(
            name=monitor_config.name,
            connection=connection,
            statsd_client=statsd_client,
            sleep_duration=monitor_config.sleep_duration,
            metric=monitor_config.metric,
            metric_type=monitor_config.metric_type,
            sql=monitor_config.sql,
            engine=engine,
            debug=debug,
        )

    def start(self, stop_event: threading.Event | None = None) -> None:
        """Sleep and poll forever.

        Only setting ``stop_event`` ends the loop; without one it runs until
        the process exits.
        """
        stop_event = stop_event or threading.Event()
        try:
            while True:
                self.log.info("monitor_sleeping", seconds=self.sleep_duration)
                if stop_event.wait(self.sleep_duration):
                    break
                try:
                    self.run_cycle()
                except Exception as exc:
                    self.log.error("cycle_failed", error=str(exc), exc_info=True)
                    send_error_metric(self.statsd_client, self.name)
        finally:
            self.log.info("monitor_stopped")
            self.close()

    def run_cycle(self) -> CycleResult:
        """Run the query once and publish a metric for every row."""
        result = CycleResult()

        try:
            cursor = self.connection.exec_driver_sql(self.sql)
            columns = list(cursor.keys())
        except SQLAlchemyError as exc:
            self.log.error("query_failed", error=str(exc))
            self._rollback()
            send_error_metric(self.statsd_client, self.name)
            result.query_failed = True
            return result

        try:
            for row in cursor:
                result.rows += 1
                try:
                    self.process_row(columns, row)
                except RowError as exc:
                    result.failed += 1
                    self.log.error("row_failed", error=exc.message, error_type=type(exc).__name__)
                    send_error_metric(self.statsd_client, self.name)
                else:
                    result.emitted += 1
        except SQLAlchemyError as exc:
            self.log.error("query_failed", error=str(exc))
            send_error_metric(self.statsd_client, self.name)
            result.query_failed = True
        finally:
            cursor.close()
            self._rollback()

        self.log.debug(
            "cycle_complete", rows=result.rows, emitted=result.emitted, failed=result.failed
        )
        return result

    def process_row(self, columns: Sequence[str], row: Sequence[Any]) -> None:
        """Decode, convert, tag and publish a single result row.

        Raises:
            RowError: If any step fails; nothing is published in that case
        """
        record = decode_row(columns, row)
        value = get_metric_float(record)
        timestamp = get_timestamp(record)
        tags = get_tags(record)

        if self.debug:
            self.log.debug(
                "metric_published",
                metric=self.metric,
                metric_type=self.metric_type,
                value=value,
                tags=tags,
                timestamp=timestamp.isoformat(),
            )

        self.dispatcher.send(self.metric_type, self.metric, value, tags, timestamp)

    def close(self) -> None:
        """Release the database connection and StatsD socket."""
        try:
            self.connection.close()
        except SQLAlchemyError as exc:
            self.log.warning("connection_close_failed", error=str(exc))
        if self.engine is not None:
            self.engine.dispose()
        close_socket = getattr(self.statsd_client, "close_socket", None)
        if callable(close_socket):
            close_socket()

    def _rollback(self) -> None:
        try:
            self.connection.rollback()
        except SQLAlchemyError as exc:
            self.log.warning("rollback_failed", error=str(exc))
