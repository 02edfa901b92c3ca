"""
Logging Configuration

Structured logging setup using structlog for consistent, parseable logs.

Log Output:
===========
Development:
    2025-01-15 10:30:00 [info     ] Content created   content_id=550e8400-... content_type=NOTE

Production (JSON):
    {"timestamp": "2025-01-15T10:30:00", "level": "info", "event": "Content created", ...}

Usage:
======
    from firefly.shared.core.logging import logger, get_logger, log_context

    logger.info("Content created", content_id=str(content.id))

    repo_logger = get_logger("firefly.repositories.content")
    repo_logger.warning("Update denied", actor_id=str(actor_id))

    # Add context to all subsequent logs in this request
    log_context(actor_id=str(actor.user_id), role=actor.role.value)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from firefly.config.settings import settings


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    Sets up structlog with:
    - Development: Colored console output for readability
    - Production: JSON output for log aggregation systems

    Called automatically when this module is imported.
    """
    # Route stdlib logging (uvicorn, sqlalchemy) through the same stream
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    # Shared processors for all environments
    shared_processors: list[Processor] = [
        # Request context bound by log_context() (actor_id, role)
        structlog.contextvars.merge_contextvars,
        # Add log level (info, warning, error, etc.)
        structlog.stdlib.add_log_level,
        # Logger name, e.g. firefly.shared.repositories.content_repository
        structlog.stdlib.add_logger_name,
        # Format positional arguments
        structlog.stdlib.PositionalArgumentsFormatter(),
        # Add ISO timestamp
        structlog.processors.TimeStamper(fmt="iso"),
        # Add stack info for exceptions
        structlog.processors.StackInfoRenderer(),
        # Decode bytes to strings
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        # Development: colored console output for readability
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        # Production: one JSON object per line for log aggregation
        processors = shared_processors + [
            # Render tracebacks into the event dict
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, defaults to module name if not specified

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Context is stored in context variables and automatically included
    in all log messages until cleared or the request ends.

    Args:
        **kwargs: Key-value pairs to add to log context
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """
    Clear all context variables.

    Call this at the end of request processing to prevent
    context from leaking to other requests.
    """
    structlog.contextvars.clear_contextvars()


# Initialize logging on module import
setup_logging()

# Default logger instance for convenient import
logger = get_logger("firefly")
