"""Configuration management for stridekit."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.units import UnitSystem

logger = logging.getLogger(__name__)


def find_env_file() -> Path | None:
    """Find .env file at git root (project root)."""
    # Search up for git root and use .env there
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / ".git").exists():
            env_file = parent / ".env"
            if env_file.exists():
                return env_file
            break
    # Fallback to current directory
    local_env = Path.cwd() / ".env"
    if local_env.exists():
        return local_env
    return None


# Find env file once at module load
_env_file = find_env_file()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be overridden with a ``STRIDE_``-prefixed variable,
    either in the environment or in a .env file at the project root.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRIDE_",
        env_file=_env_file,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Telemetry pipeline
    commit_interval_ms: int = Field(
        default=2000,
        description="How often buffered distance/elevation is folded into the totals",
        gt=0,
    )
    heading_threshold_degrees: float = Field(
        default=5.0,
        description="Minimum heading change that is propagated",
        ge=0,
    )
    heading_throttle_ms: int = Field(
        default=300,
        description="Minimum time between two propagated heading changes",
        ge=0,
    )
    heading_smoothing_window: int = Field(
        default=1,
        description="Number of magnetometer readings averaged into one heading",
        ge=1,
    )
    default_weight_kg: float = Field(
        default=70.0,
        description="Body weight used when the profile has no usable weight",
        gt=0,
    )

    # History storage
    database_path: str = Field(
        default=str(Path.home() / ".stridekit" / "workouts.duckdb"),
        description="Path to the DuckDB workout history",
    )

    # Display
    unit_system: UnitSystem = Field(
        default=UnitSystem.METRIC,
        description="Units used by the CLI: metric or imperial",
    )

    # Application Settings
    environment: str = Field(
        default="dev",
        description="Environment: dev, staging, prod",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern).

    Returns:
        Settings instance with all configuration
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.debug(f"Loaded settings for environment {_settings.environment}")
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
