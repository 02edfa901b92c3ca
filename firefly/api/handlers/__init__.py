"""
API Handlers

Route handlers for the Firefly API.

Handlers follow the pattern:
- Parse HTTP requests
- Call repository methods with the authenticated caller
- Format HTTP responses

Permission and workflow rules live in the repositories.
"""

from firefly.api.handlers import (
    assignment_handler,
    content_handler,
    health_handler,
    note_handler,
    resource_handler,
)

__all__ = [
    "assignment_handler",
    "content_handler",
    "health_handler",
    "note_handler",
    "resource_handler",
]
