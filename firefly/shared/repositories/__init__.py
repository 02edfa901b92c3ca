"""
Repository Pattern Implementations

Repositories encapsulate database queries and the permission-checked
workflows built on them. They flush but never commit; the request-scoped
session owns the transaction.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]               ← Generic get/count/create
         │
         ├── UserRepository                 ← Actor resolution for policies
         └── ContentRepository              ← Unified NOTE/RESOURCE content

    NoteCompatibilityRepository             ← Legacy note shape → ContentRepository
    ResourceCompatibilityRepository         ← Legacy resource shape → ContentRepository

Usage Example:
==============
    from firefly.shared.repositories import ContentRepository

    async def public_resources(db: AsyncSession, user_id: UUID, role: UserRole):
        repo = ContentRepository(db)
        return await repo.filter(
            ContentFilters(content_types=[ContentType.RESOURCE], visibilities=[Visibility.PUBLIC]),
            user_id,
            role,
        )
"""

from firefly.shared.repositories.base import BaseRepository
from firefly.shared.repositories.content_repository import ContentRepository, PaginatedContent
from firefly.shared.repositories.note_compatibility_repository import NoteCompatibilityRepository
from firefly.shared.repositories.resource_compatibility_repository import (
    ResourceCompatibilityRepository,
)
from firefly.shared.repositories.user_repository import UserRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "ContentRepository",
    "PaginatedContent",
    # Legacy facades
    "NoteCompatibilityRepository",
    "ResourceCompatibilityRepository",
]
