"""Structured logging configuration.

structlog with stdlib integration. Request-scoped context (request_id) is
merged into every event via structlog.contextvars. Output is JSON by
default; set LOG_JSON=false for human-readable console output.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class LoggingSettings(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


def configure_logging(settings: LoggingSettings) -> None:
    """Configure structlog and the stdlib root logger.

    Called once at import. Loggers from get_logger() and plain stdlib
    loggers (uvicorn, sqlalchemy) share the same processors and renderer.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": renderer,
                    "foreign_pre_chain": processors,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": sys.stdout,
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": settings.log_level,
                    "propagate": True,
                },
            },
        }
    )


_settings = LoggingSettings()
configure_logging(_settings)


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger, typically ``get_logger(__name__)``.

    Example:
        logger = get_logger(__name__)
        logger.warning("unmapped_error_status", original_status=418)
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
