"""
Content Assignment Model

A task attached to a NOTE and handed to a user.

Lifecycle:
==========
    ASSIGNED ──▶ IN_PROGRESS ──▶ COMPLETED
        │             │
        └─────────────┴────────▶ CANCELLED

    COMPLETED and CANCELLED are terminal. Completing stamps
    completed_at / completed_by and, optionally, completion_notes.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, JSONType, TimestampMixin
from firefly.shared.models.enums import AssignmentPriority, AssignmentStatus


if TYPE_CHECKING:
    from firefly.shared.models.content import Content
    from firefly.shared.models.user import User


class ContentAssignment(Base, TimestampMixin):
    """
    Assignment model.

    Attributes:
        content_id: The NOTE this task belongs to
        title: Short task title
        description: Optional details
        assigned_to: User expected to do the task
        assigned_by: User who created the task
        status: ASSIGNED, IN_PROGRESS, COMPLETED or CANCELLED
        priority: LOW, MEDIUM, HIGH or URGENT
        due_date: Optional deadline
        completed_at / completed_by / completion_notes: Set on completion
        estimated_minutes: Optional effort estimate
        tags: Free-form task tags
    """

    __tablename__ = "content_assignments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    content_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("content.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    assigned_to: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    assigned_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    status: Mapped[AssignmentStatus] = mapped_column(
        SQLEnum(AssignmentStatus),
        nullable=False,
        default=AssignmentStatus.ASSIGNED,
        index=True,
    )

    priority: Mapped[AssignmentPriority] = mapped_column(
        SQLEnum(AssignmentPriority),
        nullable=False,
        default=AssignmentPriority.MEDIUM,
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    completion_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    estimated_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    content: Mapped["Content"] = relationship("Content", back_populates="assignments")
    assignee: Mapped["User"] = relationship("User", foreign_keys=[assigned_to])
    assigner: Mapped["User"] = relationship("User", foreign_keys=[assigned_by])

    @property
    def is_terminal(self) -> bool:
        """True once the task is COMPLETED or CANCELLED."""
        return self.status in (AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED)

    def __repr__(self) -> str:
        return f"<ContentAssignment(id={self.id}, status={self.status})>"
