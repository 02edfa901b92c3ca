"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Content not found or access denied",
            "details": {}
        }
    }

Exception Handling:
===================
1. FireflyException subclasses → Use their status_code and to_dict()
2. Request validation errors   → 400 with validation details
3. Other exceptions            → 500 with generic message (details hidden)

Usage:
======
    from firefly.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from firefly.shared.core.exceptions import FireflyException
from firefly.shared.core.logging import logger
from firefly.shared.schemas.common import ErrorDetail, ErrorResponse


def _error_body(code: str, message: str, details: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return ErrorResponse(error=ErrorDetail(code=code, message=message, details=details)).model_dump()


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(FireflyException)
    async def firefly_exception_handler(
        request: Request,
        exc: FireflyException,
    ) -> JSONResponse:
        """
        Handle Firefly-specific exceptions.

        Server-side failures are logged as errors, client errors as warnings.
        """
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.to_dict()),
        )

    @app.exception_handler(RequestValidationError)
    @app.exception_handler(PydanticValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle request and schema validation errors.

        These occur when a body or query doesn't match the expected schema.
        """
        errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
        logger.warning(
            "Validation error",
            errors=errors,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("VALIDATION_ERROR", "Request validation failed", {"errors": errors}),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
