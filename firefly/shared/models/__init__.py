"""
Firefly SQLAlchemy Models

This package contains all database models for the Firefly application.

Model Hierarchy:
================
    User
       ├── family (Family)
       └── created_families (Family[])

    Content (content_type discriminator)
       ├── Note
       ├── Resource
       ├── tag_links (ContentTag[])
       ├── structured_tags (ContentStructuredTag[]) ──▶ Tag ──▶ Category
       ├── documents (ContentDocument[])            ──▶ Document
       ├── shares (ContentShare[])
       ├── assignments (ContentAssignment[])        (NOTE only)
       └── ratings (ContentRating[])                (RESOURCE only)

Usage:
======
    from firefly.shared.models import Content, Note, Resource

    note = Note(title="Care plan", created_by=user.id, note_type=NoteType.CARE_PLAN)
    note.tags = ["hospice", "medication"]
"""

from firefly.shared.models.base import Base, TimestampMixin, SoftDeleteMixin
from firefly.shared.models.enums import (
    UserRole,
    ContentType,
    NoteType,
    ResourceType,
    ResourceStatus,
    Visibility,
    AssignmentStatus,
    AssignmentPriority,
    SortOrder,
    ContentSortField,
)
from firefly.shared.models.user import User
from firefly.shared.models.family import Family
from firefly.shared.models.category import Category, Tag
from firefly.shared.models.document import Document
from firefly.shared.models.content import (
    Content,
    ContentStructuredTag,
    ContentTag,
    Note,
    Resource,
    NOTE_ONLY_FIELDS,
    RESOURCE_ONLY_FIELDS,
)
from firefly.shared.models.content_assignment import ContentAssignment
from firefly.shared.models.content_rating import ContentRating
from firefly.shared.models.content_document import ContentDocument
from firefly.shared.models.content_share import ContentShare

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    # Enums
    "UserRole",
    "ContentType",
    "NoteType",
    "ResourceType",
    "ResourceStatus",
    "Visibility",
    "AssignmentStatus",
    "AssignmentPriority",
    "SortOrder",
    "ContentSortField",
    # Collaborators
    "User",
    "Family",
    "Category",
    "Tag",
    "Document",
    # Content
    "Content",
    "Note",
    "Resource",
    "ContentTag",
    "ContentStructuredTag",
    "ContentAssignment",
    "ContentRating",
    "ContentDocument",
    "ContentShare",
    "NOTE_ONLY_FIELDS",
    "RESOURCE_ONLY_FIELDS",
]
