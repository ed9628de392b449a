"""
DogStatsD client construction and the monitor health metric.
"""

from __future__ import annotations

import socket

import structlog
from datadog.dogstatsd import DogStatsd

from anemometer.config.models import StatsdConfig
from anemometer.core.errors import SetupError

logger = structlog.get_logger()

ERROR_METRIC = "anemometer.error"
SAMPLE_RATE = 1
UNIX_SCHEME = "unix://"


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (IPv6 hosts in brackets) into its parts."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port:
        raise SetupError(f"invalid statsd address '{address}': expected host:port")
    try:
        port_number = int(port)
    except ValueError as exc:
        raise SetupError(f"invalid statsd port in '{address}'") from exc
    if not 0 < port_number < 65536:
        raise SetupError(f"invalid statsd port in '{address}'")
    return host.strip("[]"), port_number


def create_statsd_client(config: StatsdConfig) -> DogStatsd:
    """
    Build the DogStatsD client a monitor publishes through.

    ``unix:///path/to/socket`` addresses use a Unix domain socket; anything
    else must be ``host:port`` and the host must resolve.

    Raises:
        SetupError: If the address is malformed or the host can't be resolved
    """
    tags = list(config.tags)

    if config.address.startswith(UNIX_SCHEME):
        socket_path = config.address[len(UNIX_SCHEME):]
        if not socket_path:
            raise SetupError(f"invalid statsd address '{config.address}'")
        return DogStatsd(socket_path=socket_path, constant_tags=tags)

    host, port = parse_address(config.address)
    try:
        socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except socket.gaierror as exc:
        raise SetupError(f"unable to resolve statsd host '{host}': {exc}") from exc

    return DogStatsd(host=host, port=port, constant_tags=tags)


def send_error_metric(client: DogStatsd, name: str) -> None:
    """Publish the ``anemometer.error`` gauge for a monitor.

    A failure here is logged and not raised further.
    """
    try:
        client.gauge(ERROR_METRIC, 1, tags=[f"name:{name}"], sample_rate=SAMPLE_RATE)
    except Exception as exc:
        logger.warning("error_metric_failed", monitor=name, error=str(exc))
