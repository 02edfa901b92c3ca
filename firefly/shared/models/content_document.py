"""
Content Document Model

Join row attaching an external Document to a content record.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from firefly.shared.models.content import Content
    from firefly.shared.models.document import Document


class ContentDocument(Base, TimestampMixin):
    """
    Attachment of a document to content.

    Attributes:
        content_id: Content the document is attached to
        document_id: The attached document
        created_by: User who attached it
        order: Display position, ascending
        is_main: Whether this is the primary document of the content
    """

    __tablename__ = "content_documents"

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

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_main: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    content: Mapped["Content"] = relationship("Content", back_populates="documents")
    document: Mapped["Document"] = relationship("Document")

    def __repr__(self) -> str:
        return f"<ContentDocument(content_id={self.content_id}, document_id={self.document_id})>"
