"""
Shared configuration management for rate gates.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GateSettings(BaseSettings):
    """Settings common to every gate created through the factory."""

    model_config = SettingsConfigDict(
        env_prefix="GATES_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Interval used when a gate is created without an explicit one
    default_interval_ms: int = Field(default=1000, gt=0)

    # Logging
    log_level: str = Field(default="info")

    # Metrics
    metrics_enabled: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_settings() -> GateSettings:
    """Get the process settings, loaded once from the environment."""
    return GateSettings()
