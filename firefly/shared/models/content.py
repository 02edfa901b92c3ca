"""
Unified Content Model

One table holds every piece of user-facing content. Notes (family journals,
care plans, checklists) and resources (the curated library) share the same
row layout for the common fields, and single-table inheritance gives each
variant its own columns.

Model Hierarchy:
================
    Content                          ← content_type discriminator
       ├── Note      (NOTE)          ← note_type, is_pinned, editing flags
       └── Resource  (RESOURCE)      ← curation status, rating aggregates

    Content
       ├── tag_links (ContentTag[])              - Free-form tags, exposed as .tags
       ├── structured_tags (ContentStructuredTag[]) - Taxonomy tag links
       ├── documents (ContentDocument[])         - Attached documents
       ├── shares (ContentShare[])               - Explicit per-user shares
       ├── assignments (ContentAssignment[])     - Tasks (NOTE only)
       └── ratings (ContentRating[])             - Ratings (RESOURCE only)

Feature Flags:
==============
    has_assignments  - a task was ever assigned on this note (never reset)
    has_curation     - the resource is waiting in the curation queue
    has_ratings      - the resource accepts ratings
    has_sharing      - at least one share row was created

SAMPLE RESOURCE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 7c9e6679-7425-40de-944b-e07fc1f90ae7                      │
│ content_type     │ RESOURCE                                                   │
│ title            │ "Hospice Benefits Explained"                               │
│ tags             │ ["hospice", "insurance"]                                   │
│ visibility       │ PUBLIC                                                     │
│ resource_type    │ ARTICLE                                                    │
│ status           │ PENDING                                                    │
│ has_curation     │ true                                                       │
│ rating           │ 4.50  (rating_count = 2)                                   │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable, Optional
import uuid

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefly.shared.models.base import Base, JSONType, SoftDeleteMixin, TimestampMixin
from firefly.shared.models.enums import (
    ContentType,
    NoteType,
    ResourceStatus,
    ResourceType,
    Visibility,
)


if TYPE_CHECKING:
    from firefly.shared.models.category import Category, Tag
    from firefly.shared.models.content_assignment import ContentAssignment
    from firefly.shared.models.content_document import ContentDocument
    from firefly.shared.models.content_rating import ContentRating
    from firefly.shared.models.content_share import ContentShare
    from firefly.shared.models.family import Family
    from firefly.shared.models.user import User


class ContentTag(Base):
    """A single free-form tag on a content record."""

    __tablename__ = "content_tags"
    __table_args__ = (
        UniqueConstraint("content_id", "name", name="uq_content_tags_content_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    content_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("content.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ContentTag(name={self.name})>"


class ContentStructuredTag(Base):
    """Link between content and a taxonomy Tag."""

    __tablename__ = "content_structured_tags"
    __table_args__ = (
        UniqueConstraint("content_id", "tag_id", name="uq_content_structured_tags"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    content_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("content.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    tag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    tag: Mapped["Tag"] = relationship("Tag")


class Content(Base, TimestampMixin, SoftDeleteMixin):
    """
    Base row for every NOTE and RESOURCE.

    Never instantiated directly; create a Note or a Resource. The
    content_type column is the polymorphic discriminator and is fixed
    at creation.
    """

    __tablename__ = "content"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY & DISCRIMINATOR
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    content_type: Mapped[ContentType] = mapped_column(
        SQLEnum(ContentType),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # COMMON FIELDS
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    family_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("families.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    visibility: Mapped[Visibility] = mapped_column(
        SQLEnum(Visibility),
        nullable=False,
        default=Visibility.PRIVATE,
        index=True,
    )

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ═══════════════════════════════════════════════════════════════════════════
    # FEATURE FLAGS
    # ═══════════════════════════════════════════════════════════════════════════

    has_assignments: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_curation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_ratings: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_sharing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    tag_links: Mapped[list["ContentTag"]] = relationship(
        "ContentTag",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ContentTag.name",
    )

    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_links",
        "name",
        creator=lambda name: ContentTag(name=name),
    )

    creator: Mapped["User"] = relationship("User", foreign_keys=[created_by])
    family: Mapped[Optional["Family"]] = relationship("Family")
    category: Mapped[Optional["Category"]] = relationship("Category")

    documents: Mapped[list["ContentDocument"]] = relationship(
        "ContentDocument",
        back_populates="content",
        cascade="all, delete-orphan",
        order_by="ContentDocument.order",
    )

    shares: Mapped[list["ContentShare"]] = relationship(
        "ContentShare",
        back_populates="content",
        cascade="all, delete-orphan",
    )

    assignments: Mapped[list["ContentAssignment"]] = relationship(
        "ContentAssignment",
        back_populates="content",
        cascade="all, delete-orphan",
        order_by="ContentAssignment.created_at.desc()",
    )

    ratings: Mapped[list["ContentRating"]] = relationship(
        "ContentRating",
        back_populates="content",
        cascade="all, delete-orphan",
        order_by="ContentRating.created_at.desc()",
    )

    structured_tags: Mapped[list["ContentStructuredTag"]] = relationship(
        "ContentStructuredTag",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {
        "polymorphic_on": "content_type",
    }

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def replace_tags(self, names: Iterable[str]) -> None:
        """
        Make the tag set equal to ``names``.

        Existing links that are kept are left alone so a flush never
        inserts a duplicate (content_id, name) before the old row is gone.
        """
        wanted = list(dict.fromkeys(names))
        self.tag_links = [link for link in self.tag_links if link.name in wanted]
        present = {link.name for link in self.tag_links}
        for name in wanted:
            if name not in present:
                self.tag_links.append(ContentTag(name=name))

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Content(id={self.id}, type={self.content_type}, title={self.title[:30]})>"


class Note(Content):
    """
    NOTE variant: family notes, journals, checklists and care plans.

    Notes carry the assignment workflow and per-share edit permissions.
    """

    note_type: Mapped[Optional[NoteType]] = mapped_column(SQLEnum(NoteType), nullable=True)
    is_pinned: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    allow_comments: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    allow_editing: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    last_edited_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    last_edited_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __mapper_args__ = {
        "polymorphic_identity": ContentType.NOTE,
        # Variant columns load with every SELECT on Content
        "polymorphic_load": "inline",
    }


class Resource(Content):
    """
    RESOURCE variant: entries in the curated resource library.

    Non-admin submissions wait in the curation queue as PENDING until an
    admin approves or features them. Ratings are aggregated onto the row.
    """

    resource_type: Mapped[Optional[ResourceType]] = mapped_column(
        SQLEnum(ResourceType),
        nullable=True,
    )
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    target_audience: Mapped[Optional[list[str]]] = mapped_column(JSONType, nullable=True)
    external_meta: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    status: Mapped[Optional[ResourceStatus]] = mapped_column(
        SQLEnum(ResourceStatus),
        nullable=True,
        index=True,
    )

    submitted_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    approved_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    featured_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    featured_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # 2-decimal mean of all ratings, NULL until the first rating
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    rating_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_verified: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    last_verified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __mapper_args__ = {
        "polymorphic_identity": ContentType.RESOURCE,
        "polymorphic_load": "inline",
    }


# Columns owned by each variant; writing the other variant's columns is rejected
NOTE_ONLY_FIELDS = frozenset(
    {"note_type", "is_pinned", "allow_comments", "allow_editing", "last_edited_by", "last_edited_at"}
)
RESOURCE_ONLY_FIELDS = frozenset(
    {
        "resource_type",
        "url",
        "target_audience",
        "external_meta",
        "status",
        "submitted_by",
        "approved_by",
        "approved_at",
        "featured_by",
        "featured_at",
        "rating",
        "rating_count",
        "is_verified",
        "last_verified_at",
    }
)
