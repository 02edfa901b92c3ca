"""
Legacy Resource Schemas

The resource shape older clients still speak. ResourceCompatibilityRepository
maps these onto Content:

    content       ↔ body
    content_type  ↔ resource_type
    submitted_by  ↔ created_by
    submitter     ↔ creator
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from firefly.shared.models.enums import (
    ContentSortField,
    ResourceStatus,
    ResourceType,
    SortOrder,
    Visibility,
)
from firefly.shared.schemas.common import BaseSchema
from firefly.shared.schemas.content import (
    CategorySummary,
    ContentDocumentResponse,
    ContentResponse,
    FamilySummary,
    RatingResponse,
    UserSummary,
)


class ResourceFilters(BaseModel):
    submitted_by: Optional[UUID] = None
    family_id: Optional[UUID] = None
    content_type: Optional[list[ResourceType]] = None
    status: Optional[list[ResourceStatus]] = None
    visibility: Optional[list[Visibility]] = None
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = None
    healthcare_categories: Optional[list[str]] = None
    search: Optional[str] = None
    featured: Optional[bool] = None
    verified: Optional[bool] = None
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)
    curated_only: Optional[bool] = None
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    sort_by: ContentSortField = ContentSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class CreateResourceInput(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = None
    content: Optional[str] = None
    content_type: ResourceType
    url: Optional[str] = None
    target_audience: Optional[list[str]] = None
    visibility: Optional[Visibility] = None
    family_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    external_meta: Optional[dict[str, Any]] = None


class UpdateResourceInput(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    content: Optional[str] = None
    content_type: Optional[ResourceType] = None
    url: Optional[str] = None
    target_audience: Optional[list[str]] = None
    visibility: Optional[Visibility] = None
    family_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    tags: Optional[list[str]] = None
    external_meta: Optional[dict[str, Any]] = None
    is_verified: Optional[bool] = None


class TrackShareInput(BaseModel):
    share_method: str = Field(min_length=1, max_length=50)
    shared_with: Optional[UUID] = None
    share_data: Optional[dict[str, Any]] = None


class LegacyResource(BaseSchema):
    """A RESOURCE rendered in the legacy shape; relations pass through unchanged."""

    id: UUID
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    content_type: Optional[ResourceType] = None
    url: Optional[str] = None
    category_id: Optional[UUID] = None
    tags: list[str] = Field(default_factory=list)
    visibility: Visibility
    family_id: Optional[UUID] = None
    target_audience: list[str] = Field(default_factory=list)

    status: Optional[ResourceStatus] = None
    submitted_by: UUID
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    featured_by: Optional[UUID] = None
    featured_at: Optional[datetime] = None

    view_count: int = 0
    rating: Optional[float] = None
    rating_count: int = 0

    external_meta: Optional[dict[str, Any]] = None
    is_verified: bool = False
    last_verified_at: Optional[datetime] = None
    has_curation: bool = False
    has_ratings: bool = False

    created_at: datetime
    updated_at: datetime

    submitter: Optional[UserSummary] = None
    family: Optional[FamilySummary] = None
    category: Optional[CategorySummary] = None
    documents: Optional[list[ContentDocumentResponse]] = None
    ratings: Optional[list[RatingResponse]] = None

    @classmethod
    def from_content(cls, content: ContentResponse) -> "LegacyResource":
        return cls(
            id=content.id,
            title=content.title,
            description=content.description,
            content=content.body,
            content_type=content.resource_type,
            url=content.url,
            category_id=content.category_id,
            tags=content.tags,
            visibility=content.visibility,
            family_id=content.family_id,
            target_audience=content.target_audience or [],
            status=content.status,
            submitted_by=content.created_by,
            approved_by=content.approved_by,
            approved_at=content.approved_at,
            featured_by=content.featured_by,
            featured_at=content.featured_at,
            view_count=content.view_count,
            rating=content.rating,
            rating_count=content.rating_count or 0,
            external_meta=content.external_meta,
            is_verified=bool(content.is_verified),
            last_verified_at=content.last_verified_at,
            has_curation=content.has_curation,
            has_ratings=content.has_ratings,
            created_at=content.created_at,
            updated_at=content.updated_at,
            submitter=content.creator,
            family=content.family,
            category=content.category,
            documents=content.documents,
            ratings=content.ratings,
        )


class PaginatedResources(BaseModel):
    content: list[LegacyResource]
    total: int
    page: int
    limit: int
    total_pages: int


class ResourceStatistics(BaseModel):
    total_resources: int
    approved_resources: int
    featured_resources: int
    pending_resources: int
    average_rating: float = 0.0
