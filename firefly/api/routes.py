"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live   → Health check endpoints
    /content                 → Unified NOTE/RESOURCE content
    /content/{id}/assignments, /assignments
                             → Task assignment on notes
    /notes                   → Legacy note shape
    /resources               → Legacy resource shape

Usage:
======
    from firefly.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from firefly.api.handlers import (
    assignment_handler,
    content_handler,
    health_handler,
    note_handler,
    resource_handler,
)
from firefly.shared.schemas.common import ErrorResponse


# Documented on every authenticated router; bodies come from the error handlers
_ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404)
}


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    app.include_router(
        content_handler.router,
        prefix="/content",
        tags=["Content"],
        responses=_ERROR_RESPONSES,
    )

    # Paths span /content and /assignments, so no prefix
    app.include_router(
        assignment_handler.router,
        tags=["Assignments"],
        responses=_ERROR_RESPONSES,
    )

    app.include_router(
        note_handler.router,
        prefix="/notes",
        tags=["Notes"],
        responses=_ERROR_RESPONSES,
    )

    app.include_router(
        resource_handler.router,
        prefix="/resources",
        tags=["Resources"],
        responses=_ERROR_RESPONSES,
    )
