"""
ACH Tables - Structured Logging

JSON log formatting and logging setup for the conversion core. Modules
log through ``logging.getLogger(__name__)`` and attach structured fields
via ``extra``; this module decides how those records are rendered.
"""

import json
import logging
import logging.config
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from .config import Config, get_config


class LogCategory(Enum):
    """Log categories for filtering and routing."""

    SYSTEM = "system"
    CONVERSION = "conversion"
    VALIDATION = "validation"
    PERFORMANCE = "performance"


@dataclass
class LogEvent:
    """Structured log event."""

    timestamp: float
    level: str
    category: LogCategory
    message: str
    component: str
    operation: Optional[str] = None
    exception: Optional[BaseException] = None
    performance_metrics: Optional[Dict[str, float]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "timestamp": self.timestamp,
            "iso_timestamp": datetime.fromtimestamp(self.timestamp, timezone.utc).isoformat(),
            "level": self.level,
            "category": self.category.value,
            "message": self.message,
            "component": self.component,
            "operation": self.operation,
            "metadata": self.metadata,
        }

        if self.exception:
            result["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
                "traceback": traceback.format_exception(
                    type(self.exception), self.exception, self.exception.__traceback__
                ),
            }

        if self.performance_metrics:
            result["performance_metrics"] = self.performance_metrics

        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class StructuredFormatter(logging.Formatter):
    """Formatter rendering each record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        category = getattr(record, "category", LogCategory.SYSTEM)
        if not isinstance(category, LogCategory):
            category = LogCategory(category)

        log_event = LogEvent(
            timestamp=record.created,
            level=record.levelname,
            category=category,
            message=record.getMessage(),
            component=getattr(record, "component", record.name),
            operation=getattr(record, "operation", None),
            exception=record.exc_info[1] if record.exc_info else None,
            performance_metrics=getattr(record, "performance_metrics", None),
            metadata=getattr(record, "metadata", {}),
        )

        return log_event.to_json()


def build_logging_config(config: Config) -> Dict[str, Any]:
    """Build a ``logging.config.dictConfig`` mapping for the package logger."""
    formatter = "structured" if config.logging.json_format else "simple"
    level = "DEBUG" if config.debug else config.log_level.value

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"()": StructuredFormatter},
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": formatter,
                "stream": config.logging.stream,
            },
        },
        "loggers": {
            "ach_tables": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(config: Optional[Config] = None) -> None:
    """Configure the ``ach_tables`` logger from configuration."""
    logging.config.dictConfig(build_logging_config(config or get_config()))
