"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Firefly.
It includes the declarative base and common mixins for timestamps and soft deletion.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── TimestampMixin   ← Automatic created_at/updated_at
       │
       └── SoftDeleteMixin  ← Soft delete with is_deleted/deleted_at

Usage:
======
    from firefly.shared.models.base import Base, TimestampMixin, SoftDeleteMixin

    class Content(Base, TimestampMixin, SoftDeleteMixin):
        __tablename__ = "content"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
        # Soft-deleted with content.mark_deleted()
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSONB on PostgreSQL, plain JSON everywhere else (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time used for every timestamp the app writes."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or through one of the mixin classes.
    """

    type_annotation_map = {
        dict[str, Any]: JSONType,
        list[str]: JSONType,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    - created_at: Set by SQLAlchemy on INSERT, server_default covers raw inserts
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Mixin that adds soft delete capability to models.

    Instead of permanently deleting records, soft delete flags them and
    stamps the deletion time. Rows are never removed by the application.

    Example values:
        is_deleted=False, deleted_at=None               (record is active)
        is_deleted=True,  deleted_at=2025-01-20T09:00Z  (record was soft-deleted)

    Querying:
    =========
    Queries should filter out soft-deleted records:
        query.where(MyModel.is_deleted.is_(False))
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=text("false"),
        nullable=False,
        index=True,
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    def mark_deleted(self) -> None:
        """Flag the record as deleted and stamp the deletion time."""
        self.is_deleted = True
        self.deleted_at = utcnow()
