"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- Standard Responses: MessageResponse, ErrorResponse, HealthResponse
- loaded_fields(): read ORM attributes without triggering async lazy loads

Usage:
======
    from firefly.shared.schemas.common import BaseSchema, MessageResponse

    class FamilySummary(BaseSchema):
        id: UUID
        name: str
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import inspect


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All response schemas should inherit from this class.
    Provides:
    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


def loaded_fields(instance: Any, names: Iterable[str]) -> dict[str, Any]:
    """
    Collect the named attributes of an ORM instance that are already loaded.

    Relationships that were not eager-loaded are skipped instead of being
    lazy-loaded, which would fail under AsyncSession. Names the instance's
    class does not define (the other content variant's columns) are skipped.
    """
    unloaded = inspect(instance).unloaded
    return {
        name: getattr(instance, name)
        for name in names
        if name not in unloaded and hasattr(type(instance), name)
    }


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    message: str
    success: bool = True


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    All API errors return this format for consistency.

    Example:
        {
            "error": {
                "code": "NOT_FOUND",
                "message": "Content not found or access denied",
                "details": {}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "firefly"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
