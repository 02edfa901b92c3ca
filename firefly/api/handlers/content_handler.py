"""
Content Handler

Endpoints for unified NOTE/RESOURCE content.

ARCHITECTURE:
=============
    Handler → ContentRepository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call repository methods with the caller's (user_id, role)
- Format HTTP responses

Permission checks and workflow rules live in the repository and the
policy module. Domain errors propagate to the global exception handlers.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from firefly.api.dependencies import ContentRepo, CurrentActor
from firefly.shared.core.exceptions import ContentNotFoundError
from firefly.shared.data.healthcare_tags import HEALTHCARE_CATEGORIES
from firefly.shared.schemas.common import MessageResponse
from firefly.shared.schemas.content import (
    AttachDocumentInput,
    ContentDocumentResponse,
    ContentFilters,
    ContentOptions,
    ContentResponse,
    CreateContentInput,
    PaginatedContentResponse,
    RateContentInput,
    RatingResponse,
    ShareContentInput,
    SharePermissions,
    ShareResponse,
    UpdateContentInput,
)


router = APIRouter()

_SUMMARY_OPTIONS = ContentOptions(include_creator=True, include_family=True, include_category=True)


# ═══════════════════════════════════════════════════════════════════════════════
# CATALOG
# ═══════════════════════════════════════════════════════════════════════════════


@router.get("/healthcare-categories")
async def list_healthcare_categories(_actor: CurrentActor) -> list[dict]:
    """Healthcare categories usable in the healthcare_categories filter."""
    return [
        {
            "name": category.name,
            "description": category.description,
            "color": category.color,
            "icon": category.icon,
            "tags": list(category.tags),
        }
        for category in HEALTHCARE_CATEGORIES
    ]


@router.get("/curation-queue", response_model=list[ContentResponse])
async def get_curation_queue(actor: CurrentActor, repo: ContentRepo):
    """Resources awaiting approval. Admins only."""
    queue = await repo.get_curation_queue(actor.user_id, actor.role)
    return [ContentResponse.from_model(c) for c in queue]


# ═══════════════════════════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
async def create_content(data: CreateContentInput, actor: CurrentActor, repo: ContentRepo):
    """
    Create a NOTE or RESOURCE.

    Resources from non-admins start PENDING in the curation queue.
    """
    content = await repo.create(data, actor.user_id, actor.role)
    return ContentResponse.from_model(content)


@router.get("", response_model=PaginatedContentResponse)
async def list_content(
    filters: Annotated[ContentFilters, Query()],
    actor: CurrentActor,
    repo: ContentRepo,
):
    """Paginated, visibility-gated content search."""
    page = await repo.filter(filters, actor.user_id, actor.role, _SUMMARY_OPTIONS)
    return PaginatedContentResponse(
        content=[ContentResponse.from_model(c) for c in page.content],
        total=page.total,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
    )


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
    """Single record with every relation. 404 when missing or not visible."""
    content = await repo.find_by_id(content_id, actor.user_id, actor.role, ContentOptions.all())
    if content is None:
        raise ContentNotFoundError()
    return ContentResponse.from_model(content)


@router.patch("/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: UUID,
    data: UpdateContentInput,
    actor: CurrentActor,
    repo: ContentRepo,
):
    content = await repo.update(content_id, data, actor.user_id, actor.role)
    return ContentResponse.from_model(content)


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
    """Soft delete."""
    await repo.delete(content_id, actor.user_id, actor.role)
    return None


@router.post("/{content_id}/view", response_model=MessageResponse)
async def record_view(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
    if await repo.find_by_id(content_id, actor.user_id, actor.role) is None:
        raise ContentNotFoundError()
    await repo.increment_view_count(content_id)
    return MessageResponse(message="View recorded")


# ═══════════════════════════════════════════════════════════════════════════════
# CURATION & RATINGS
# ═══════════════════════════════════════════════════════════════════════════════


@router.post("/{content_id}/approve", response_model=ContentResponse)
async def approve_content(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
    content = await repo.approve_content(content_id, actor.user_id, actor.role)
    return ContentResponse.from_model(content)


@router.post("/{content_id}/feature", response_model=ContentResponse)
async def feature_content(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
    content = await repo.feature_content(content_id, actor.user_id, actor.role)
    return ContentResponse.from_model(content)


@router.put("/{content_id}/rating", response_model=RatingResponse)
async def rate_content(
    content_id: UUID,
    data: RateContentInput,
    actor: CurrentActor,
    repo: ContentRepo,
):
    """Create or replace the caller's rating of a resource."""
    if await repo.find_by_id(content_id, actor.user_id, actor.role) is None:
        raise ContentNotFoundError()
    rating = await repo.rate_content(
        content_id, actor.user_id, data.rating, data.review, data.is_helpful
    )
    return RatingResponse.from_model(rating)


# ═══════════════════════════════════════════════════════════════════════════════
# DOCUMENTS & SHARES
# ═══════════════════════════════════════════════════════════════════════════════


@router.post(
    "/{content_id}/documents",
    response_model=ContentDocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_document(
    content_id: UUID,
    data: AttachDocumentInput,
    actor: CurrentActor,
    repo: ContentRepo,
):
    """Attach a document. Requires edit rights on the content."""
    await repo.authorize_update(content_id, actor.user_id, actor.role)
    link = await repo.attach_document(
        content_id, data.document_id, actor.user_id, data.order, data.is_main
    )
    return ContentDocumentResponse.from_model(link)


@router.delete("/{content_id}/documents/{document_id}", response_model=MessageResponse)
async def detach_document(
    content_id: UUID,
    document_id: UUID,
    actor: CurrentActor,
    repo: ContentRepo,
):
    removed = await repo.detach_document(content_id, document_id, actor.user_id, actor.role)
    return MessageResponse(message=f"Removed {removed} attachment(s)", success=removed > 0)


@router.post(
    "/{content_id}/shares",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
)
async def share_content(
    content_id: UUID,
    data: ShareContentInput,
    actor: CurrentActor,
    repo: ContentRepo,
):
    """Share with a user. Creator, admin, or a share holder with can_share."""
    await repo.authorize_share(content_id, actor.user_id, actor.role)
    share = await repo.share_content(
        content_id,
        actor.user_id,
        data.user_id,
        SharePermissions(
            can_edit=data.can_edit,
            can_comment=data.can_comment,
            can_share=data.can_share,
        ),
    )
    return ShareResponse.from_model(share)
