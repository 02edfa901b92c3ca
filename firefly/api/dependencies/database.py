"""
Database Dependency

FastAPI dependency for database sessions.

Yields one async session per request. The session is committed when the
handler returns and rolled back if it raised, so everything a repository
flushed during the request lands atomically.

Usage:
======
    from firefly.api.dependencies.database import DbSession

    @router.get("/content/healthcare-categories")
    async def categories(db: DbSession):
        ...

Tests swap the store by overriding this dependency:

    app.dependency_overrides[get_db] = lambda: test_session
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from firefly.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
