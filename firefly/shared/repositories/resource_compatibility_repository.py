"""
Resource Compatibility Repository

Serves the legacy resource API on top of the unified content table.

Field Mapping:
==============
    legacy          unified
    -------------   -------------
    content      ↔  body
    content_type ↔  resource_type
    submitted_by ↔  created_by
    submitter    ↔  creator
    (implicit)   →  content_type = RESOURCE

Legacy resources default to PUBLIC visibility, unlike unified content.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from firefly.shared.core.logging import get_logger
from firefly.shared.models.base import utcnow
from firefly.shared.models.content import Content
from firefly.shared.models.content_document import ContentDocument
from firefly.shared.models.content_rating import ContentRating
from firefly.shared.models.content_share import ContentShare
from firefly.shared.models.enums import ContentType, ResourceStatus, UserRole, Visibility
from firefly.shared.repositories.content_repository import ContentRepository
from firefly.shared.schemas.content import (
    ContentFilters,
    ContentOptions,
    ContentResponse,
    CreateContentInput,
    UpdateContentInput,
)
from firefly.shared.schemas.resource import (
    CreateResourceInput,
    LegacyResource,
    PaginatedResources,
    ResourceFilters,
    ResourceStatistics,
    UpdateResourceInput,
)


logger = get_logger(__name__)

_RESOURCE_DETAIL = ContentOptions(
    include_documents=True,
    include_ratings=True,
    include_creator=True,
    include_family=True,
    include_category=True,
)

_RESOURCE_LIST = ContentOptions(include_creator=True, include_family=True, include_category=True)

_RENAMED = {"content": "body", "content_type": "resource_type"}


def _to_legacy(content: Content) -> LegacyResource:
    return LegacyResource.from_content(ContentResponse.from_model(content))


def _rename(fields: dict[str, Any]) -> dict[str, Any]:
    return {_RENAMED.get(k, k): v for k, v in fields.items()}


class ResourceCompatibilityRepository:
    """
    Legacy resource operations backed by ContentRepository.

    Usage:
        resources = ResourceCompatibilityRepository(db)
        page = await resources.filter(ResourceFilters(featured=True), user_id, role)
    """

    def __init__(self, session: AsyncSession, content: Optional[ContentRepository] = None) -> None:
        self.content = content or ContentRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # CRUD
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(
        self,
        data: CreateResourceInput,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> LegacyResource:
        fields = _rename(data.model_dump(exclude_none=True))
        fields.setdefault("visibility", Visibility.PUBLIC)
        created = await self.content.create(
            CreateContentInput(content_type=ContentType.RESOURCE, **fields),
            actor_id,
            actor_role,
        )
        return _to_legacy(created)

    async def find_by_id(
        self,
        resource_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> Optional[LegacyResource]:
        """The resource with documents, ratings and submitter, or None."""
        content = await self.content.find_by_id(resource_id, actor_id, actor_role, _RESOURCE_DETAIL)
        if content is None or content.content_type != ContentType.RESOURCE:
            return None
        return _to_legacy(content)

    async def filter(
        self,
        filters: ResourceFilters,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> PaginatedResources:
        page = await self.content.filter(
            ContentFilters(
                content_types=[ContentType.RESOURCE],
                created_by=filters.submitted_by,
                family_id=filters.family_id,
                resource_types=filters.content_type,
                statuses=filters.status,
                visibilities=filters.visibility,
                category_id=filters.category_id,
                tags=filters.tags,
                healthcare_categories=filters.healthcare_categories,
                search=filters.search,
                featured=filters.featured,
                verified=filters.verified,
                min_rating=filters.min_rating,
                has_curation=filters.curated_only,
                page=filters.page,
                limit=filters.limit,
                sort_by=filters.sort_by,
                sort_order=filters.sort_order,
            ),
            actor_id,
            actor_role,
            _RESOURCE_LIST,
        )
        return PaginatedResources(
            content=[_to_legacy(c) for c in page.content],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )

    async def update(
        self,
        resource_id: UUID,
        data: UpdateResourceInput,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> LegacyResource:
        """Partial update. Marking a resource verified stamps last_verified_at."""
        fields = _rename(data.model_dump(exclude_unset=True))
        if fields.get("is_verified"):
            fields["last_verified_at"] = utcnow()
        updated = await self.content.update(
            resource_id,
            UpdateContentInput(content_type=ContentType.RESOURCE, **fields),
            actor_id,
            actor_role,
        )
        return _to_legacy(updated)

    async def delete(self, resource_id: UUID, actor_id: UUID, actor_role: UserRole) -> None:
        await self.content.delete(resource_id, actor_id, actor_role)

    async def increment_view_count(self, resource_id: UUID) -> bool:
        return await self.content.increment_view_count(resource_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # CURATION & RATINGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def approve(self, resource_id: UUID, actor_id: UUID, actor_role: UserRole) -> LegacyResource:
        return _to_legacy(await self.content.approve_content(resource_id, actor_id, actor_role))

    async def feature(self, resource_id: UUID, actor_id: UUID, actor_role: UserRole) -> LegacyResource:
        return _to_legacy(await self.content.feature_content(resource_id, actor_id, actor_role))

    async def get_curation_queue(self, actor_id: UUID, actor_role: UserRole) -> list[LegacyResource]:
        queue = await self.content.get_curation_queue(actor_id, actor_role)
        return [_to_legacy(c) for c in queue]

    async def rate(
        self,
        resource_id: UUID,
        user_id: UUID,
        rating: int,
        review: Optional[str] = None,
        is_helpful: Optional[bool] = None,
    ) -> ContentRating:
        return await self.content.rate_content(resource_id, user_id, rating, review, is_helpful)

    # ═══════════════════════════════════════════════════════════════════════════
    # DOCUMENTS & SHARING
    # ═══════════════════════════════════════════════════════════════════════════

    async def attach_document(
        self,
        resource_id: UUID,
        document_id: UUID,
        attached_by: UUID,
        order: int = 0,
        is_main: bool = False,
    ) -> ContentDocument:
        return await self.content.attach_document(resource_id, document_id, attached_by, order, is_main)

    async def detach_document(
        self,
        resource_id: UUID,
        document_id: UUID,
        actor_id: UUID,
        actor_role: UserRole,
    ) -> int:
        return await self.content.detach_document(resource_id, document_id, actor_id, actor_role)

    async def track_share(
        self,
        resource_id: UUID,
        shared_by: UUID,
        share_method: str,
        shared_with: Optional[UUID] = None,
        share_data: Optional[dict[str, Any]] = None,
    ) -> ContentShare:
        """
        Record that a resource was passed on (email, link, print...).

        The share row carries no permission bits; resources are read-only
        to recipients.
        """
        return await self.content.share_content(
            resource_id,
            shared_by,
            shared_with,
            share_method=share_method,
            share_data=share_data,
        )

    async def authorize_share(self, resource_id: UUID, actor_id: UUID, actor_role: UserRole) -> None:
        """
        Raise unless the actor may pass the resource to a named user.

        Anyone who can read a PUBLIC resource may; otherwise only its
        submitter or an admin.
        """
        await self.content.authorize_share(resource_id, actor_id, actor_role)

    async def get_statistics(self) -> ResourceStatistics:
        """Library-wide counts over live resources."""
        live = (
            Content.content_type == ContentType.RESOURCE,
            Content.is_deleted.is_(False),
        )
        status = Content.__table__.c.status

        statistics = ResourceStatistics(
            total_resources=await self.content.count(*live),
            approved_resources=await self.content.count(*live, status == ResourceStatus.APPROVED),
            featured_resources=await self.content.count(*live, status == ResourceStatus.FEATURED),
            pending_resources=await self.content.count(*live, status == ResourceStatus.PENDING),
            average_rating=round(await self.content.average_rating(*live), 2),
        )
        logger.debug("Resource statistics computed", total=statistics.total_resources)
        return statistics
