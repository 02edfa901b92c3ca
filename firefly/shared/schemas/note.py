"""
Legacy Note Schemas

The note shape older clients still speak. NoteCompatibilityRepository maps
these onto Content:

    content ↔ body
    type    ↔ note_type
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from firefly.shared.models.enums import ContentSortField, NoteType, SortOrder, Visibility
from firefly.shared.schemas.common import BaseSchema
from firefly.shared.schemas.content import (
    AssignmentResponse,
    CategorySummary,
    ContentDocumentResponse,
    ContentResponse,
    FamilySummary,
    ShareResponse,
    StructuredTagSummary,
    UserSummary,
)


class NoteFilters(BaseModel):
    created_by: Optional[UUID] = None
    family_id: Optional[UUID] = None
    type: Optional[list[NoteType]] = None
    visibility: Optional[list[Visibility]] = None
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = None
    search: Optional[str] = None
    has_assignments: Optional[bool] = None
    is_pinned: Optional[bool] = None
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    sort_by: ContentSortField = ContentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class CreateNoteInput(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    content: Optional[str] = None
    type: Optional[NoteType] = None
    visibility: Optional[Visibility] = None
    family_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    is_pinned: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_editing: Optional[bool] = None


class UpdateNoteInput(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = None
    type: Optional[NoteType] = None
    visibility: Optional[Visibility] = None
    family_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = None
    is_pinned: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_editing: Optional[bool] = None


class LegacyNote(BaseSchema):
    """A NOTE rendered in the legacy shape; relations pass through unchanged."""

    id: UUID
    title: str
    content: Optional[str] = None
    type: Optional[NoteType] = None
    visibility: Visibility
    created_by: UUID
    family_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    category_id: Optional[UUID] = None
    is_pinned: bool = False
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    allow_comments: bool = False
    allow_editing: bool = False
    last_edited_by: Optional[UUID] = None
    last_edited_at: Optional[datetime] = None
    view_count: int = 0
    created_at: datetime
    updated_at: datetime
    has_assignments: bool = False

    creator: Optional[UserSummary] = None
    family: Optional[FamilySummary] = None
    category: Optional[CategorySummary] = None
    documents: Optional[list[ContentDocumentResponse]] = None
    shares: Optional[list[ShareResponse]] = None
    assignments: Optional[list[AssignmentResponse]] = None
    structured_tags: Optional[list[StructuredTagSummary]] = None

    @classmethod
    def from_content(cls, content: ContentResponse) -> "LegacyNote":
        return cls(
            id=content.id,
            title=content.title,
            content=content.body,
            type=content.note_type,
            visibility=content.visibility,
            created_by=content.created_by,
            family_id=content.family_id,
            tags=content.tags,
            category_id=content.category_id,
            is_pinned=bool(content.is_pinned),
            is_deleted=content.is_deleted,
            deleted_at=content.deleted_at,
            allow_comments=bool(content.allow_comments),
            allow_editing=bool(content.allow_editing),
            last_edited_by=content.last_edited_by,
            last_edited_at=content.last_edited_at,
            view_count=content.view_count,
            created_at=content.created_at,
            updated_at=content.updated_at,
            has_assignments=content.has_assignments,
            creator=content.creator,
            family=content.family,
            category=content.category,
            documents=content.documents,
            shares=content.shares,
            assignments=content.assignments,
            structured_tags=content.structured_tags,
        )


class PaginatedNotes(BaseModel):
    content: list[LegacyNote]
    total: int
    page: int
    limit: int
    total_pages: int
