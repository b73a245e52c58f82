"""Structured logging configuration with structlog.

This module provides centralized structlog configuration for applications
using undoable, supporting both production (JSON) and development
(console) output modes.

Log Entry Format:
    {
        "timestamp": "2024-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "chain_unwinding",
        "chain_id": "uuid",
        ...additional context
    }

Usage:
    # At application startup
    from undoable.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")  # JSON output
    configure_structlog(environment="development")  # Console output
    configure_structlog()  # Mode from UNDOABLE_LOG_ENVIRONMENT
"""

import logging
import os

import structlog
from structlog.typing import Processor

from undoable.config.chain_config import ChainConfig

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the application.

    Should be called once at application startup. The library itself never
    calls this; it only emits events through structlog.get_logger().

    Args:
        environment: 'production' for JSON output, 'development' for console.
                    Defaults to ChainConfig.from_environment().log_environment.
    """
    if environment is None:
        environment = ChainConfig.from_environment().log_environment

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger_for_service(
    service_name: str, component: str = "undoable"
) -> structlog.BoundLogger:
    """Get a pre-bound logger for a service.

    Args:
        service_name: The name of the service (typically class name).
        component: The component type (default: "undoable").

    Returns:
        A BoundLogger with service and component bound.
    """
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )
