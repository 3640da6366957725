"""
Centralized logging configuration for the registry server.

Configures structlog for JSON output in production and console in development.
Uvicorn and library loggers are routed through the same formatter.
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.types import EventDict, Processor

APP_NAME = "ar-terraform-registry"

# Loggers that are too chatty at INFO/DEBUG
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "aiohttp", "gcloud.aio.auth")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log events."""
    event_dict["app"] = APP_NAME
    return event_dict


def reorder_keys(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Reorder keys so level and timestamp come first."""
    ordered: EventDict = {}
    for key in ("level", "timestamp"):
        value = event_dict.pop(key, None)
        if value is not None:
            ordered[key] = value

    ordered.update(event_dict)
    return ordered


def utc_timestamper(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO8601 UTC timestamp (millisecond precision) to log events."""
    now = datetime.now(UTC)
    event_dict["timestamp"] = now.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    return event_dict


def _final_processors(json_logs: bool) -> list[Processor]:
    if json_logs:
        return [
            structlog.processors.format_exc_info,
            reorder_keys,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(json_logs: bool = True, log_level: str = "INFO") -> None:
    """Configure logging for the entire application."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        utc_timestamper,
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_final_processors(json_logs),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Uvicorn installs its own handlers; hand its records to the root logger instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
