"""
Configuration Manager for the named timer registry.

This module provides centralized configuration loading with validation
and environment variable substitution.
"""

import logging
import os
import re
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

VALID_BACKENDS = ["thread", "asyncio"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"Configuration validation error at '{path}': {message}")


class ConfigManager:
    """
    Configuration manager for the timer registry.

    Focuses on practical configuration loading, validation, and environment
    variable substitution.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to main configuration file
        """
        self.config_path = config_path
        self.config_data: dict[str, Any] = {}

    def load_config(self, validate: bool = True) -> dict[str, Any]:
        """
        Load configuration from file.

        Args:
            validate: Whether to validate configuration after loading

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If the configuration file does not exist
            ConfigValidationError: If parsing or validation fails
        """
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file: {e}", self.config_path
            ) from e

        if not isinstance(self.config_data, dict):
            raise ConfigValidationError(
                "Top level of config file must be a mapping", self.config_path
            )

        self.config_data = self._substitute_env_vars(self.config_data)

        if validate:
            self._validate_config()

        logger.info(f"Configuration loaded from: {self.config_path}")
        return self.config_data

    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
        """
        if isinstance(config, dict):
            return {
                key: self._substitute_env_vars(value) for key, value in config.items()
            }
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            pattern = r"\$\{([^}]+)\}"

            def replace_env_var(match):
                var_spec = match.group(1)
                if ":" in var_spec:
                    var_name, default_value = var_spec.split(":", 1)
                else:
                    var_name, default_value = var_spec, ""

                return os.getenv(var_name, default_value)

            return re.sub(pattern, replace_env_var, config)
        else:
            return config

    def _validate_config(self):
        """Validate configuration structure and values."""
        errors = []

        backend = self.get_config("timers.backend", "thread")
        if backend not in VALID_BACKENDS:
            errors.append(
                f"Invalid timers.backend '{backend}'. Must be one of: {VALID_BACKENDS}"
            )

        log_level = str(self.get_config("logging.log_level", "INFO")).upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid logging.log_level '{log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        if errors:
            raise ConfigValidationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                self.config_path,
            )

    def get_config(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated path.

        Args:
            path: Dot-separated configuration path (e.g., "timers.backend")
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = path.split(".")
        current = self.config_data

        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def set_config(self, path: str, value: Any):
        """
        Set configuration value by dot-separated path.

        Args:
            path: Dot-separated configuration path
            value: Value to set
        """
        keys = path.split(".")
        current = self.config_data

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def save_config(self, output_path: Optional[str] = None):
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration file (defaults to original path)
        """
        save_path = output_path or self.config_path
        save_dir = os.path.dirname(save_path)
        if save_dir:
            os.makedirs(save_dir, exist_ok=True)

        with open(save_path, "w") as f:
            yaml.dump(self.config_data, f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to: {save_path}")

    def __str__(self) -> str:
        """String representation of configuration manager."""
        return (
            f"ConfigManager(config_path={self.config_path}, "
            f"sections={len(self.config_data)})"
        )

