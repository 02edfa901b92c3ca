"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with the lookups the content policies need.

Common Operations:
==================
- get_actor()      → Build the policy Actor for an authenticated caller

Usage Example:
==============
    async def load_actor(db: AsyncSession, user_id: UUID, role: UserRole) -> Actor:
        return await UserRepository(db).get_actor(user_id, role)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from firefly.shared.models.enums import UserRole
from firefly.shared.models.family import Family
from firefly.shared.models.user import User
from firefly.shared.policies.content_policy import Actor
from firefly.shared.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_created_family_ids(self, user_id: UUID) -> frozenset[UUID]:
        """
        IDs of the families this user created.

        SQL Generated:
            SELECT id FROM families WHERE created_by_id = '...'
        """
        result = await self.session.execute(
            select(Family.id).where(Family.created_by_id == user_id)
        )
        return frozenset(result.scalars().all())

    async def get_actor(self, user_id: UUID, role: UserRole) -> Actor:
        """
        Resolve the facts policy checks need about the caller.

        The role comes from the identity provider, not from the users table.
        A caller without a users row still gets an Actor, with no family.

        Args:
            user_id: Authenticated user id
            role: Role asserted by the identity token

        Returns:
            Actor with family membership and, for volunteers, created families
        """
        user = await self.get(user_id)
        created_family_ids: frozenset[UUID] = frozenset()
        if role == UserRole.VOLUNTEER:
            created_family_ids = await self.get_created_family_ids(user_id)

        return Actor(
            user_id=user_id,
            role=role,
            family_id=user.family_id if user else None,
            created_family_ids=created_family_ids,
        )
