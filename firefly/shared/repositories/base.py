"""
Base Repository

Generic async repository with the CRUD operations every entity repository
shares. Entity repositories inherit from this class and add their own
queries and workflow methods.

What This Provides:
===================
- get(id)            → Fetch single record by UUID
- count(*criteria)   → Count records matching SQL criteria
- add(instance)      → Insert a built instance, errors as PersistenceError

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        def __init__(self, session: AsyncSession):
            super().__init__(User, session)

    user = await UserRepository(db).get(user_id)  # typed as User

flush() vs commit():
====================
Repository methods only flush(). The request-scoped session from get_db()
commits once the handler returns, or rolls everything back if it raised,
so one request is one transaction.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from firefly.shared.core.exceptions import PersistenceError
from firefly.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Content)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM users WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def count(self, *criteria: Any) -> int:
        """
        Count records matching the given SQL criteria.

        Example:
            pending = await repo.count(
                Content.content_type == ContentType.RESOURCE,
                Content.is_deleted.is_(False),
            )

        SQL Generated:
            SELECT COUNT(*) FROM content WHERE content_type = 'RESOURCE' AND ...
        """
        query = select(sql_count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def add(self, instance: Any, label: Optional[str] = None) -> Any:
        """
        Insert an already-built instance.

        Used for rows whose class is chosen at runtime (Note vs Resource)
        or that belong to another table than ``self.model``. Store errors
        surface as PersistenceError.
        """
        self.session.add(instance)
        try:
            # Flush: send INSERT to database (but don't commit yet)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(
                f"Failed to create {label or type(instance).__name__}: {e.__class__.__name__}"
            ) from e
        return instance

