"""
Content Schemas

Inputs accepted by ContentRepository and the responses rendered from
Content rows.

Schema Groups:
==============
- Inputs:    CreateContentInput, UpdateContentInput, AssignmentInput,
             SharePermissions, RateContentInput, AttachDocumentInput
- Queries:   ContentFilters, ContentOptions
- Responses: ContentResponse (+ nested summaries), AssignmentResponse,
             RatingResponse, ShareResponse, ContentDocumentResponse,
             PaginatedContentResponse

Responses are built with ``from_model()`` rather than ``model_validate()``
so that relationships the repository did not load are left as None instead
of being lazy-loaded.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from firefly.shared.models.enums import (
    AssignmentPriority,
    AssignmentStatus,
    ContentSortField,
    ContentType,
    NoteType,
    ResourceStatus,
    ResourceType,
    SortOrder,
    Visibility,
)
from firefly.shared.schemas.common import BaseSchema, loaded_fields


# ═══════════════════════════════════════════════════════════════════════════════
# INPUTS
# ═══════════════════════════════════════════════════════════════════════════════


class CreateContentInput(BaseModel):
    """
    Fields for a new NOTE or RESOURCE.

    Variant fields (note_type, resource_type, url, ...) must match
    content_type; the repository rejects the other variant's fields.
    """

    content_type: ContentType
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = None
    body: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    category_id: Optional[UUID] = None
    family_id: Optional[UUID] = None
    visibility: Optional[Visibility] = None

    # NOTE
    note_type: Optional[NoteType] = None
    is_pinned: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_editing: Optional[bool] = None

    # RESOURCE
    resource_type: Optional[ResourceType] = None
    url: Optional[str] = None
    target_audience: Optional[list[str]] = None
    external_meta: Optional[dict[str, Any]] = None


class UpdateContentInput(BaseModel):
    """
    Partial update. Only fields explicitly set are written.

    content_type may be sent but must equal the record's current type.
    """

    content_type: Optional[ContentType] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    body: Optional[str] = None
    tags: Optional[list[str]] = None
    category_id: Optional[UUID] = None
    family_id: Optional[UUID] = None
    visibility: Optional[Visibility] = None

    # NOTE
    note_type: Optional[NoteType] = None
    is_pinned: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_editing: Optional[bool] = None

    # RESOURCE
    resource_type: Optional[ResourceType] = None
    url: Optional[str] = None
    target_audience: Optional[list[str]] = None
    external_meta: Optional[dict[str, Any]] = None
    is_verified: Optional[bool] = None
    last_verified_at: Optional[datetime] = None


class AssignmentInput(BaseModel):
    """A task to hand to a user on a NOTE."""

    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = None
    assigned_to: UUID
    priority: AssignmentPriority = AssignmentPriority.MEDIUM
    due_date: Optional[datetime] = None
    estimated_minutes: Optional[int] = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)


class AssignmentUpdate(BaseModel):
    """Task details the assigner may revise. Status moves have their own endpoint."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    priority: Optional[AssignmentPriority] = None
    due_date: Optional[datetime] = None
    estimated_minutes: Optional[int] = Field(default=None, ge=0)
    tags: Optional[list[str]] = None


class AssignmentStatusUpdate(BaseModel):
    status: AssignmentStatus
    completion_notes: Optional[str] = None


class SharePermissions(BaseModel):
    """Permission bits for a NOTE share. Omitted bits take the note defaults."""

    can_edit: Optional[bool] = None
    can_comment: Optional[bool] = None
    can_share: Optional[bool] = None


class ShareContentInput(SharePermissions):
    user_id: UUID


class RateContentInput(BaseModel):
    # Range is checked by the repository so every caller gets the same error
    rating: int
    review: Optional[str] = None
    is_helpful: Optional[bool] = None


class AttachDocumentInput(BaseModel):
    document_id: UUID
    order: int = Field(default=0, ge=0)
    is_main: bool = False


# ═══════════════════════════════════════════════════════════════════════════════
# QUERIES
# ═══════════════════════════════════════════════════════════════════════════════


class ContentFilters(BaseModel):
    """
    Conjunctive filters for ContentRepository.filter().

    Every set field narrows the result. List fields match any of their
    values. ``tags``, ``healthcare_tags`` and the tags of
    ``healthcare_categories`` are merged and match content having at
    least one of them.
    """

    content_types: Optional[list[ContentType]] = None
    note_types: Optional[list[NoteType]] = None
    resource_types: Optional[list[ResourceType]] = None
    statuses: Optional[list[ResourceStatus]] = None
    created_by: Optional[UUID] = None
    family_id: Optional[UUID] = None
    visibilities: Optional[list[Visibility]] = None
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = None
    healthcare_categories: Optional[list[str]] = None
    healthcare_tags: Optional[list[str]] = None

    has_assignments: Optional[bool] = None
    has_curation: Optional[bool] = None
    has_ratings: Optional[bool] = None

    featured: Optional[bool] = None
    verified: Optional[bool] = None
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_pinned: Optional[bool] = None

    search: Optional[str] = None

    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    sort_by: ContentSortField = ContentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class ContentOptions(BaseModel):
    """Optional relations to load with content. All off by default."""

    include_documents: bool = False
    include_shares: bool = False
    include_assignments: bool = False
    include_structured_tags: bool = False
    include_ratings: bool = False
    include_creator: bool = False
    include_family: bool = False
    include_category: bool = False
    include_deleted: bool = False

    @classmethod
    def all(cls) -> "ContentOptions":
        """Every relation, used by detail views."""
        return cls(
            include_documents=True,
            include_shares=True,
            include_assignments=True,
            include_structured_tags=True,
            include_ratings=True,
            include_creator=True,
            include_family=True,
            include_category=True,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NESTED SUMMARIES
# ═══════════════════════════════════════════════════════════════════════════════


class UserSummary(BaseSchema):
    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class FamilySummary(BaseSchema):
    id: UUID
    name: str


class CategorySummary(BaseSchema):
    id: UUID
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None


class DocumentSummary(BaseSchema):
    id: UUID
    title: str
    file_name: str
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    type: Optional[str] = None
    file_path: Optional[str] = None


class StructuredTagSummary(BaseSchema):
    id: UUID
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    category_id: Optional[UUID] = None


def _summary(schema: type[BaseSchema], value: Any) -> Any:
    return schema.model_validate(value) if value is not None else None


# ═══════════════════════════════════════════════════════════════════════════════
# JOIN ROW RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ContentDocumentResponse(BaseSchema):
    id: UUID
    content_id: UUID
    document_id: UUID
    created_by: UUID
    order: int
    is_main: bool
    document: Optional[DocumentSummary] = None

    @classmethod
    def from_model(cls, link: Any) -> "ContentDocumentResponse":
        data = loaded_fields(
            link, ("id", "content_id", "document_id", "created_by", "order", "is_main", "document")
        )
        data["document"] = _summary(DocumentSummary, data.get("document"))
        return cls(**data)


class ShareResponse(BaseSchema):
    id: UUID
    content_id: UUID
    user_id: Optional[UUID] = None
    shared_by: UUID
    can_edit: Optional[bool] = None
    can_comment: Optional[bool] = None
    can_share: Optional[bool] = None
    share_method: Optional[str] = None
    share_data: Optional[dict[str, Any]] = None
    created_at: datetime
    user: Optional[UserSummary] = None

    @classmethod
    def from_model(cls, share: Any) -> "ShareResponse":
        data = loaded_fields(share, cls.model_fields)
        data["user"] = _summary(UserSummary, data.get("user"))
        return cls(**data)


class RatingResponse(BaseSchema):
    id: UUID
    content_id: UUID
    user_id: UUID
    rating: int
    review: Optional[str] = None
    is_helpful: Optional[bool] = None
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None

    @classmethod
    def from_model(cls, rating: Any) -> "RatingResponse":
        data = loaded_fields(rating, cls.model_fields)
        data["user"] = _summary(UserSummary, data.get("user"))
        return cls(**data)


class ContentSummary(BaseSchema):
    """Minimal content shape embedded in assignment listings."""

    id: UUID
    content_type: ContentType
    title: str
    family_id: Optional[UUID] = None
    family: Optional[FamilySummary] = None

    @classmethod
    def from_model(cls, content: Any) -> "ContentSummary":
        data = loaded_fields(content, cls.model_fields)
        data["family"] = _summary(FamilySummary, data.get("family"))
        return cls(**data)


class AssignmentResponse(BaseSchema):
    id: UUID
    content_id: UUID
    title: str
    description: Optional[str] = None
    assigned_to: UUID
    assigned_by: UUID
    status: AssignmentStatus
    priority: AssignmentPriority
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[UUID] = None
    completion_notes: Optional[str] = None
    estimated_minutes: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    assignee: Optional[UserSummary] = None
    assigner: Optional[UserSummary] = None
    content: Optional[ContentSummary] = None

    @classmethod
    def from_model(cls, assignment: Any) -> "AssignmentResponse":
        data = loaded_fields(assignment, cls.model_fields)
        data["assignee"] = _summary(UserSummary, data.get("assignee"))
        data["assigner"] = _summary(UserSummary, data.get("assigner"))
        if data.get("content") is not None:
            data["content"] = ContentSummary.from_model(data["content"])
        data["tags"] = data.get("tags") or []
        return cls(**data)


# ═══════════════════════════════════════════════════════════════════════════════
# CONTENT RESPONSE
# ═══════════════════════════════════════════════════════════════════════════════


class ContentResponse(BaseSchema):
    """
    A NOTE or RESOURCE with whichever relations were loaded.

    Variant fields of the other type are always None.
    """

    id: UUID
    content_type: ContentType
    title: str
    description: Optional[str] = None
    body: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    category_id: Optional[UUID] = None
    family_id: Optional[UUID] = None
    created_by: UUID
    visibility: Visibility
    view_count: int = 0
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    has_assignments: bool = False
    has_curation: bool = False
    has_ratings: bool = False
    has_sharing: bool = False

    # NOTE
    note_type: Optional[NoteType] = None
    is_pinned: Optional[bool] = None
    allow_comments: Optional[bool] = None
    allow_editing: Optional[bool] = None
    last_edited_by: Optional[UUID] = None
    last_edited_at: Optional[datetime] = None

    # RESOURCE
    resource_type: Optional[ResourceType] = None
    url: Optional[str] = None
    target_audience: Optional[list[str]] = None
    external_meta: Optional[dict[str, Any]] = None
    status: Optional[ResourceStatus] = None
    submitted_by: Optional[UUID] = None
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    featured_by: Optional[UUID] = None
    featured_at: Optional[datetime] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    is_verified: Optional[bool] = None
    last_verified_at: Optional[datetime] = None

    # Relations, present only when loaded
    creator: Optional[UserSummary] = None
    family: Optional[FamilySummary] = None
    category: Optional[CategorySummary] = None
    documents: Optional[list[ContentDocumentResponse]] = None
    shares: Optional[list[ShareResponse]] = None
    assignments: Optional[list[AssignmentResponse]] = None
    ratings: Optional[list[RatingResponse]] = None
    structured_tags: Optional[list[StructuredTagSummary]] = None

    @classmethod
    def from_model(cls, content: Any) -> "ContentResponse":
        # tags is a proxy over tag_links, so read the links to stay lazy-load safe
        data = loaded_fields(content, [name for name in cls.model_fields if name != "tags"])
        links = loaded_fields(content, ("tag_links",)).get("tag_links", [])
        data["tags"] = [link.name for link in links]

        data["creator"] = _summary(UserSummary, data.get("creator"))
        data["family"] = _summary(FamilySummary, data.get("family"))
        data["category"] = _summary(CategorySummary, data.get("category"))
        if "documents" in data:
            data["documents"] = [ContentDocumentResponse.from_model(d) for d in data["documents"]]
        if "shares" in data:
            data["shares"] = [ShareResponse.from_model(s) for s in data["shares"]]
        if "assignments" in data:
            data["assignments"] = [AssignmentResponse.from_model(a) for a in data["assignments"]]
        if "ratings" in data:
            data["ratings"] = [RatingResponse.from_model(r) for r in data["ratings"]]
        if "structured_tags" in data:
            data["structured_tags"] = [
                StructuredTagSummary.model_validate(link.tag) for link in data["structured_tags"]
            ]
        return cls(**data)


class PaginatedContentResponse(BaseModel):
    """One page of content plus paging metadata."""

    content: list[ContentResponse]
    total: int
    page: int
    limit: int
    total_pages: int
