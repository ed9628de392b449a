"""
Monitors: poll a database on an interval and publish each row to StatsD.
"""

from anemometer.monitor.coercion import get_metric_float, get_timestamp
from anemometer.monitor.dispatch import MetricDispatcher
from anemometer.monitor.launcher import launch_monitors, run_forever
from anemometer.monitor.monitor import CycleResult, Monitor
from anemometer.monitor.rows import decode_row
from anemometer.monitor.statsd import ERROR_METRIC, create_statsd_client, send_error_metric
from anemometer.monitor.tags import get_tags

__all__ = [
    "ERROR_METRIC",
    "CycleResult",
    "MetricDispatcher",
    "Monitor",
    "create_statsd_client",
    "decode_row",
    "get_metric_float",
    "get_tags",
    "get_timestamp",
    "launch_monitors",
    "run_forever",
    "send_error_metric",
]
