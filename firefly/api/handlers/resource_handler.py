"""
Resource Handler

Legacy resource library endpoints, served through
ResourceCompatibilityRepository.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from firefly.api.dependencies import CurrentActor, ResourceRepo
from firefly.shared.core.exceptions import ContentNotFoundError
from firefly.shared.schemas.content import RateContentInput, RatingResponse, ShareResponse
from firefly.shared.schemas.resource import (
    CreateResourceInput,
    LegacyResource,
    PaginatedResources,
    ResourceFilters,
    ResourceStatistics,
    TrackShareInput,
    UpdateResourceInput,
)


router = APIRouter()


@router.get("/statistics", response_model=ResourceStatistics)
async def get_statistics(_actor: CurrentActor, resources: ResourceRepo):
    return await resources.get_statistics()


@router.get("/curation-queue", response_model=list[LegacyResource])
async def get_curation_queue(actor: CurrentActor, resources: ResourceRepo):
    return await resources.get_curation_queue(actor.user_id, actor.role)


@router.post("", response_model=LegacyResource, status_code=status.HTTP_201_CREATED)
async def create_resource(data: CreateResourceInput, actor: CurrentActor, resources: ResourceRepo):
    """Submit a resource. PUBLIC unless a visibility is given."""
    return await resources.create(data, actor.user_id, actor.role)


@router.get("", response_model=PaginatedResources)
async def list_resources(
    filters: Annotated[ResourceFilters, Query()],
    actor: CurrentActor,
    resources: ResourceRepo,
):
    return await resources.filter(filters, actor.user_id, actor.role)


@router.get("/{resource_id}", response_model=LegacyResource)
async def get_resource(resource_id: UUID, actor: CurrentActor, resources: ResourceRepo):
    resource = await resources.find_by_id(resource_id, actor.user_id, actor.role)
    if resource is None:
        raise ContentNotFoundError("Resource not found or access denied")
    return resource


@router.patch("/{resource_id}", response_model=LegacyResource)
async def update_resource(
    resource_id: UUID,
    data: UpdateResourceInput,
    actor: CurrentActor,
    resources: ResourceRepo,
):
    return await resources.update(resource_id, data, actor.user_id, actor.role)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(resource_id: UUID, actor: CurrentActor, resources: ResourceRepo):
    await resources.delete(resource_id, actor.user_id, actor.role)
    return None


@router.post("/{resource_id}/approve", response_model=LegacyResource)
async def approve_resource(resource_id: UUID, actor: CurrentActor, resources: ResourceRepo):
    return await resources.approve(resource_id, actor.user_id, actor.role)


@router.post("/{resource_id}/feature", response_model=LegacyResource)
async def feature_resource(resource_id: UUID, actor: CurrentActor, resources: ResourceRepo):
    return await resources.feature(resource_id, actor.user_id, actor.role)


@router.put("/{resource_id}/rating", response_model=RatingResponse)
async def rate_resource(
    resource_id: UUID,
    data: RateContentInput,
    actor: CurrentActor,
    resources: ResourceRepo,
):
    if await resources.find_by_id(resource_id, actor.user_id, actor.role) is None:
        raise ContentNotFoundError("Resource not found or access denied")
    rating = await resources.rate(resource_id, actor.user_id, data.rating, data.review, data.is_helpful)
    return RatingResponse.from_model(rating)


@router.post("/{resource_id}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def track_share(
    resource_id: UUID,
    data: TrackShareInput,
    actor: CurrentActor,
    resources: ResourceRepo,
):
    """Record that the caller passed a resource on."""
    if await resources.find_by_id(resource_id, actor.user_id, actor.role) is None:
        raise ContentNotFoundError("Resource not found or access denied")
    if data.shared_with is not None:
        await resources.authorize_share(resource_id, actor.user_id, actor.role)
    share = await resources.track_share(
        resource_id,
        actor.user_id,
        data.share_method,
        data.shared_with,
        data.share_data,
    )
    return ShareResponse.from_model(share)
