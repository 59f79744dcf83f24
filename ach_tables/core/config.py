"""
ACH Tables - Configuration Management

Configuration for the flatten/reconstruct core, loadable from a YAML
file or from environment variables.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from pathlib import Path
from enum import Enum
import logging

from .exceptions import ConfigurationException

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Environment types for configuration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ConversionConfig:
    """Behaviour of the flatten and reconstruct operations."""

    # Strip surrounding whitespace from free-text fields when flattening
    trim_text_fields: bool = True

    # Raise on unparseable integer cells instead of keeping the old value
    strict_numeric_cells: bool = False

    # Addenda rows that do not resolve to an existing record are skipped
    skip_unresolved_addenda: bool = True


@dataclass
class LoggingConfig:
    """Logging output configuration."""

    json_format: bool = False
    stream: str = "ext://sys.stderr"


@dataclass
class MonitoringConfig:
    """Monitoring configuration."""

    enable_metrics: bool = True


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


@dataclass
class Config:
    """Main configuration class."""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    service_name: str = "ach-tables"
    version: str = "1.0.0"

    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigurationException(
                f"Configuration file must contain a mapping: {config_path}"
            )

        return cls._from_dict(config_data)

    @classmethod
    def load_from_env(cls, prefix: str = "ACH_TABLES_") -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        try:
            config.environment = Environment(
                os.getenv(f"{prefix}ENVIRONMENT", config.environment.value)
            )
            config.log_level = LogLevel(
                os.getenv(f"{prefix}LOG_LEVEL", config.log_level.value).upper()
            )
        except ValueError as e:
            raise ConfigurationException(f"Invalid environment setting: {e}")

        config.debug = _env_flag(f"{prefix}DEBUG", config.debug)

        conversion = config.conversion
        conversion.trim_text_fields = _env_flag(
            f"{prefix}TRIM_TEXT_FIELDS", conversion.trim_text_fields
        )
        conversion.strict_numeric_cells = _env_flag(
            f"{prefix}STRICT_NUMERIC_CELLS", conversion.strict_numeric_cells
        )
        conversion.skip_unresolved_addenda = _env_flag(
            f"{prefix}SKIP_UNRESOLVED_ADDENDA", conversion.skip_unresolved_addenda
        )

        config.logging.json_format = _env_flag(
            f"{prefix}LOG_JSON", config.logging.json_format
        )
        config.monitoring.enable_metrics = _env_flag(
            f"{prefix}ENABLE_METRICS", config.monitoring.enable_metrics
        )

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        config = cls()

        try:
            if "environment" in data:
                config.environment = Environment(data["environment"])
            if "log_level" in data:
                config.log_level = LogLevel(str(data["log_level"]).upper())
        except ValueError as e:
            raise ConfigurationException(f"Invalid configuration value: {e}")

        for key in ("debug", "service_name", "version"):
            if key in data:
                setattr(config, key, data[key])

        sections = (
            ("conversion", ConversionConfig),
            ("logging", LoggingConfig),
            ("monitoring", MonitoringConfig),
        )
        for key, section_cls in sections:
            if key not in data:
                continue
            try:
                setattr(config, key, section_cls(**(data[key] or {})))
            except TypeError as e:
                raise ConfigurationException(
                    f"Invalid '{key}' configuration section: {e}", config_key=key
                )

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "log_level": self.log_level.value,
            "service_name": self.service_name,
            "version": self.version,
            "conversion": {
                "trim_text_fields": self.conversion.trim_text_fields,
                "strict_numeric_cells": self.conversion.strict_numeric_cells,
                "skip_unresolved_addenda": self.conversion.skip_unresolved_addenda,
            },
            "logging": {
                "json_format": self.logging.json_format,
                "stream": self.logging.stream,
            },
            "monitoring": {
                "enable_metrics": self.monitoring.enable_metrics,
            },
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        flags = {
            "conversion.trim_text_fields": self.conversion.trim_text_fields,
            "conversion.strict_numeric_cells": self.conversion.strict_numeric_cells,
            "conversion.skip_unresolved_addenda": self.conversion.skip_unresolved_addenda,
            "logging.json_format": self.logging.json_format,
            "monitoring.enable_metrics": self.monitoring.enable_metrics,
        }
        for name, value in flags.items():
            if not isinstance(value, bool):
                errors.append(f"{name} must be a boolean")

        if not self.logging.stream.startswith("ext://"):
            errors.append("logging.stream must be an ext:// reference")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load_from_env()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config


def load_config(config_path: Union[str, Path]) -> Config:
    """Load and set configuration from file."""
    config = Config.load_from_file(config_path)
    set_config(config)
    logger.info("Loaded configuration from %s", config_path)
    return config
