"""
Firefly API Application Entry Point

FastAPI application setup with all routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           FIREFLY API                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   Middleware:    CORS  →  Error Handler                                     │
│                              │                                              │
│                              ▼                                              │
│   Routers:       Health │ Content │ Assignments │ Notes │ Resources         │
│                              │                                              │
│                              ▼                                              │
│   Dependencies:  DbSession │ CurrentActor │ ContentRepo/NoteRepo/...        │
│                              │                                              │
│                              ▼                                              │
│   Repositories → Policies → PostgreSQL                                      │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified
3. Application serves requests
4. Application stops → lifespan shutdown
5. Database connection pool disposed

Usage:
======
    # Run with uvicorn
    uvicorn firefly.api.main:app --host 0.0.0.0 --port 8000 --reload

    # Or programmatically
    from firefly.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from firefly.config.settings import settings
from firefly.shared.db import init_db, close_db
from firefly.shared.core.logging import logger
from firefly.api.middleware import setup_exception_handlers
from firefly.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup verifies the database; shutdown disposes the connection pool.
    """
    logger.info(
        "Starting Firefly API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    logger.info("Firefly API started successfully")

    yield

    logger.info("Shutting down Firefly API")
    await close_db()
    logger.info("Firefly API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    1. Creates the FastAPI app with settings
    2. Adds middleware (CORS)
    3. Sets up exception handlers
    4. Registers all routes
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Family care notes and curated healthcare resources",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()
