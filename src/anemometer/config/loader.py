"""
Configuration file loading.

Malformed configuration is fatal: every problem is raised as a
ConfigurationError for the CLI to report.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from anemometer.config.models import Config
from anemometer.core.errors import ConfigurationError

logger = structlog.get_logger()


def read_config(path: str | Path) -> Config:
    """
    Read a YAML config file and return a Config.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Parsed Config with metric types defaulted and lower-cased

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    config_path = Path(path).expanduser()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(
            f"failed to read config: {e.strerror or e}", {"path": str(config_path)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"failed to parse config: {e}", {"path": str(config_path)}) from e

    config = Config.from_dict(data)
    logger.debug("loaded_config", path=str(config_path), monitors=len(config.monitors))
    return config

