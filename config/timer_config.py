"""Timer registry configuration classes and settings loading.

This module provides the pydantic models that describe logging and timer
registry settings, and a helper that builds them from a YAML configuration
file through the ConfigManager.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from config.config_manager import ConfigManager, ConfigValidationError


class LoggingConfig(BaseModel):
    """Configuration settings for the logging system.

    Defines log levels, file output settings, and per-logger level
    overrides.
    """

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_file_max_size: int = 1024  # MB
    disable_console_logging: Optional[bool] = None
    loggers: Optional[dict[str, str]] = None


class TimerRegistryConfig(BaseModel):
    """Configuration for the timer registry.

    Selects the host timer backend and controls whether scheduling over an
    existing name cancels the timer it replaces.
    """

    backend: Literal["thread", "asyncio"] = "thread"
    cancel_replaced: bool = False


class TimersConfig(BaseModel):
    """Top level configuration aggregating logging and registry settings."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    timers: TimerRegistryConfig = Field(default_factory=TimerRegistryConfig)


def load_timers_config(config_path: str = "config.yaml") -> TimersConfig:
    """Load and validate timer settings from a YAML file.

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated TimersConfig

    Raises:
        ConfigValidationError: If the file is invalid or values fail validation
    """
    manager = ConfigManager(config_path)
    manager.load_config()

    try:
        return TimersConfig(
            logging=manager.get_config("logging", {}) or {},
            timers=manager.get_config("timers", {}) or {},
        )
    except ValidationError as e:
        raise ConfigValidationError(str(e), config_path) from e
