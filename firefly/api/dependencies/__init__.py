"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_actor(), CurrentActor
- Repositories: ContentRepo, NoteRepo, ResourceRepo

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        repo: ContentRepository = Depends(get_content_repository),
        actor: AuthenticatedActor = Depends(get_current_actor),
    ):

    # Write this:
    async def handler(repo: ContentRepo, actor: CurrentActor):
"""

from firefly.api.dependencies.database import (
    get_db,
    DbSession,
)
from firefly.api.dependencies.auth import (
    AuthenticatedActor,
    get_current_actor,
    get_identity_token,
    CurrentActor,
)
from firefly.api.dependencies.repositories import (
    get_content_repository,
    get_note_repository,
    get_resource_repository,
    ContentRepo,
    NoteRepo,
    ResourceRepo,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "AuthenticatedActor",
    "get_current_actor",
    "get_identity_token",
    "CurrentActor",
    # Repositories
    "get_content_repository",
    "get_note_repository",
    "get_resource_repository",
    "ContentRepo",
    "NoteRepo",
    "ResourceRepo",
]
