"""
Content Rating Model

One user's 1-5 rating of a RESOURCE. A user has at most one rating per
resource; rating again replaces the previous value.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from firefly.shared.models.content import Content
    from firefly.shared.models.user import User


class ContentRating(Base, TimestampMixin):
    """Rating model, unique per (content_id, user_id)."""

    __tablename__ = "content_ratings"
    __table_args__ = (
        UniqueConstraint("content_id", "user_id", name="uq_content_ratings_content_user"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_content_ratings_range"),
    )

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

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    review: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_helpful: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    content: Mapped["Content"] = relationship("Content", back_populates="ratings")
    user: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<ContentRating(content_id={self.content_id}, rating={self.rating})>"
