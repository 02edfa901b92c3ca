"""
Content Share Model

Explicit share of a content record with one user. A share grants read
access to SHARED content. On NOTE shares the permission bits also control
editing; on RESOURCE shares the bits stay NULL and the row only records
that the resource was passed on (share_method / share_data).
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, JSONType, TimestampMixin


if TYPE_CHECKING:
    from firefly.shared.models.content import Content
    from firefly.shared.models.user import User


class ContentShare(Base, TimestampMixin):
    """
    Share model.

    Attributes:
        content_id: The shared content
        user_id: Recipient; NULL when shared outside the platform
        shared_by: User who shared it
        can_edit / can_comment / can_share: NOTE permission bits
        share_method: How a resource was passed on (EMAIL, LINK, ...)
        share_data: Free-form details about the share
    """

    __tablename__ = "content_shares"

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

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    shared_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    can_edit: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    can_comment: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    can_share: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    share_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    share_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    content: Mapped["Content"] = relationship("Content", back_populates="shares")
    user: Mapped[Optional["User"]] = relationship("User", foreign_keys=[user_id])

    def __repr__(self) -> str:
        return f"<ContentShare(content_id={self.content_id}, user_id={self.user_id})>"
