"""Observability infrastructure for structured logging.

Usage:
    from undoable.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
"""

from undoable.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)

__all__ = ["configure_structlog", "get_logger_for_service"]
