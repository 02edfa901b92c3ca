"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models (unified Content with NOTE/RESOURCE variants)
- Repositories: Data access, ContentRepository plus legacy facades
- Policies: Pure access-control predicates
- Schemas: Pydantic inputs and responses
- Core: Logging, exceptions

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── data/           ← Healthcare tag taxonomy
    ├── db/             ← Database session management
    ├── migrations/     ← Alembic environment and revisions
    ├── models/         ← SQLAlchemy models
    ├── policies/       ← Who may do what to which content
    ├── repositories/   ← Data access layer
    ├── schemas/        ← Pydantic schemas
    └── utils/          ← Token helpers

Usage:
======
    from firefly.shared.models import Content, Note, Resource
    from firefly.shared.repositories import ContentRepository
    from firefly.shared.schemas import CreateContentInput, ContentResponse
    from firefly.shared.core import logger, FireflyException
"""
