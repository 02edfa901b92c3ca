"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from firefly.shared.core.logging import logger, get_logger
    from firefly.shared.core.exceptions import FireflyException, NotFoundError

    logger.info("Starting operation", actor_id=actor_id)
"""

from firefly.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from firefly.shared.core.exceptions import (
    FireflyException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ContentNotFoundError,
    AssignmentNotFoundError,
    UserNotFoundError,
    ValidationError,
    PersistenceError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "FireflyException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ContentNotFoundError",
    "AssignmentNotFoundError",
    "UserNotFoundError",
    "ValidationError",
    "PersistenceError",
]
