from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from anemometer.config.models import MetricType
from anemometer.core.errors import (
    MetricConversionError,
    MetricEmitError,
    UnknownMetricTypeError,
)
from anemometer.monitor.statsd import SAMPLE_RATE


class MetricDispatcher:
    """Sends a metric value through the StatsD call matching its metric type."""

    def __init__(self, client: Any) -> None:
        self.client = client
        self._senders: dict[str, Callable[[str, float, list[str], datetime], None]] = {
            MetricType.COUNT: self._send_count,
            MetricType.GAUGE: self._send_gauge,
            MetricType.HISTOGRAM: self._send_histogram,
            MetricType.DISTRIBUTION: self._send_distribution,
        }

    def send(
        self,
        metric_type: str,
        metric: str,
        value: float,
        tags: list[str],
        timestamp: datetime,
    ) -> None:
        """
        Publish one metric.

        ``count`` and ``gauge`` carry the row's timestamp; ``histogram`` and
        ``distribution`` are always stamped by the agent on arrival.

        Raises:
            UnknownMetricTypeError: For metric types without a StatsD call
            MetricConversionError: When a count value has no integer form
            MetricEmitError: When the client fails to send
        """
        sender = self._senders.get(metric_type)
        if sender is None:
            raise UnknownMetricTypeError(f"unknown metric type: {metric_type}")

        try:
            sender(metric, value, tags, timestamp)
        except (MetricConversionError, UnknownMetricTypeError):
            raise
        except Exception as exc:
            raise MetricEmitError(f"failed to send {metric_type} metric '{metric}': {exc}") from exc

    def _send_count(self, metric: str, value: float, tags: list[str], timestamp: datetime) -> None:
        try:
            count = int(value)
        except (OverflowError, ValueError) as exc:
            raise MetricConversionError(f"count value '{value}' is not a finite number") from exc
        self.client.count_with_timestamp(
            metric,
            count,
            timestamp=_epoch_seconds(timestamp),
            tags=tags,
            sample_rate=SAMPLE_RATE,
        )

    def _send_gauge(self, metric: str, value: float, tags: list[str], timestamp: datetime) -> None:
        self.client.gauge_with_timestamp(
            metric,
            value,
            timestamp=_epoch_seconds(timestamp),
            tags=tags,
            sample_rate=SAMPLE_RATE,
        )

    def _send_histogram(self, metric: str, value: float, tags: list[str], timestamp: datetime) -> None:
        self.client.histogram(metric, value, tags=tags, sample_rate=SAMPLE_RATE)

    def _send_distribution(
        self, metric: str, value: float, tags: list[str], timestamp: datetime
    ) -> None:
        self.client.distribution(metric, value, tags=tags, sample_rate=SAMPLE_RATE)


def _epoch_seconds(timestamp: datetime) -> int:
    return int(timestamp.timestamp())
