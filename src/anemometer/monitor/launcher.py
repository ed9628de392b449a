"""
Starts one thread per configured monitor.
"""

from __future__ import annotations

import threading

import structlog

from anemometer.config.models import Config
from anemometer.monitor.monitor import Monitor

logger = structlog.get_logger()


def launch_monitors(
    config: Config,
    *,
    debug: bool = False,
    stop_event: threading.Event | None = None,
) -> list[threading.Thread]:
    """
    Create every configured monitor and start each on its own daemon thread.

    All monitors are set up before any of them starts, so a bad connection
    string or StatsD address fails startup as a whole.

    Raises:
        SetupError: If any monitor can't be created
    """
    monitors: list[Monitor] = []
    try:
        for monitor_config in config.monitors:
            monitors.append(Monitor.create(config.statsd, monitor_config, debug=debug))
    except Exception:
        for monitor in monitors:
            monitor.close()
        raise

    threads = []
    for monitor in monitors:
        thread = threading.Thread(
            target=monitor.start,
            kwargs={"stop_event": stop_event},
            name=f"monitor-{monitor.name}",
            daemon=True,
        )
        logger.info("monitor_launched", monitor=monitor.name, metric_type=monitor.metric_type)
        thread.start()
        threads.append(thread)

    return threads


def run_forever(
    config: Config,
    *,
    debug: bool = False,
    stop_event: threading.Event | None = None,
) -> None:
    """Launch all monitors and block until ``stop_event`` is set or the process is killed."""
    stop_event = stop_event or threading.Event()
    threads = launch_monitors(config, debug=debug, stop_event=stop_event)
    stop_event.wait()
    for thread in threads:
        thread.join(timeout=5)
