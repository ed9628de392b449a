"""
Application settings using Pydantic.

Provides environment-based configuration loading with ANEMOMETER_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings; monitor definitions live in the YAML file."""

    model_config = SettingsConfigDict(env_prefix="ANEMOMETER_", env_file=".env", extra="ignore")

    config_path: str = "/etc/anemometer.yml"
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
