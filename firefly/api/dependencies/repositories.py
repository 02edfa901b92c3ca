"""
Repository Dependencies

FastAPI dependencies for repository injection.

Repositories are created per request around the request's session. They
hold no state beyond that session, so there is nothing to share between
requests.

Usage:
======
    from firefly.api.dependencies.repositories import ContentRepo

    @router.get("/content/{content_id}")
    async def get_content(content_id: UUID, actor: CurrentActor, repo: ContentRepo):
        return await repo.find_by_id(content_id, actor.user_id, actor.role)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from firefly.api.dependencies.database import get_db
from firefly.shared.repositories import (
    ContentRepository,
    NoteCompatibilityRepository,
    ResourceCompatibilityRepository,
)


async def get_content_repository(
    db: AsyncSession = Depends(get_db),
) -> ContentRepository:
    """Unified content repository bound to the request session."""
    return ContentRepository(db)


async def get_note_repository(
    content: ContentRepository = Depends(get_content_repository),
) -> NoteCompatibilityRepository:
    return NoteCompatibilityRepository(content.session, content)


async def get_resource_repository(
    content: ContentRepository = Depends(get_content_repository),
) -> ResourceCompatibilityRepository:
    return ResourceCompatibilityRepository(content.session, content)


ContentRepo = Annotated[ContentRepository, Depends(get_content_repository)]
NoteRepo = Annotated[NoteCompatibilityRepository, Depends(get_note_repository)]
ResourceRepo = Annotated[ResourceCompatibilityRepository, Depends(get_resource_repository)]
