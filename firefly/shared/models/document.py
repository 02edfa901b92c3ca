"""
Document Entity Model

Metadata for a file managed by the external document service. The content
layer references documents by id only and never touches file bytes.
"""

from typing import Optional
import uuid

from sqlalchemy import BigInteger, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from firefly.shared.models.base import Base, TimestampMixin


class Document(Base, TimestampMixin):
    """
    Document model.

    Attributes:
        id: Unique identifier (UUID v4)
        title: Display title
        file_name: Original file name
        file_size: Size in bytes
        mime_type: MIME type reported at upload
        type: Document kind (MEDICAL, INSURANCE, CARE_PLAN, ...)
        file_path: Storage key in the document service
        uploaded_by: User who uploaded the file
    """

    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    file_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    uploaded_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, file_name={self.file_name})>"
