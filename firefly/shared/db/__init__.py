"""
Database Module

This module provides database connectivity and session management for Firefly.

Architecture Overview:
======================
    FastAPI Route
        │  Dependency Injection: get_db()
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  Passed to repositories
        ▼
    ContentRepository / UserRepository / compatibility facades
        │  SQL queries
        ▼
    PostgreSQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from firefly.shared.db import get_db
    from firefly.shared.repositories import ContentRepository

    @app.get("/content/{content_id}")
    async def get_content(content_id: UUID, db: AsyncSession = Depends(get_db)):
        repo = ContentRepository(db)
        ...
"""

from firefly.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
