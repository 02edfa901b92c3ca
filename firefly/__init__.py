"""
Firefly Backend

Family care notes and a curated healthcare resource library, stored as one
unified content layer.

Package Structure:
==================
    firefly/
    ├── api/        ← FastAPI application
    ├── shared/     ← Models, repositories, policies, schemas
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn firefly.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
