"""Error Handlers — global exception handlers for the SocialGraph API.

Invariants:
    - SocialGraphError → structured JSON with error code, message, severity
    - AuthenticationError → 401 with WWW-Authenticate: Bearer; reason logged, not returned
    - InternalError → generic 500 body; detail logged only
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (SocialGraphError), validation (Pydantic), catch-all
    - Extracted from main.py to keep the app factory small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from socialgraph.core.errors import (
    AuthenticationError, ErrorSeverity, InternalError, SocialGraphError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register SocialGraph domain/infrastructure error handler."""

    @app.exception_handler(SocialGraphError)
    async def socialgraph_error_handler(request: Request, exc: SocialGraphError):
        """Handle all SocialGraph domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "resource_type": exc.context.resource_type,
            "resource_id": exc.context.resource_id,
        }
        headers = None
        if isinstance(exc, InternalError):
            logger.error(f"InternalError: {exc.detail}", extra=extra, exc_info=exc)
        elif isinstance(exc, AuthenticationError):
            extra["auth_reason"] = exc.reason.value
            logger.warning(f"Authentication failed: {exc.reason.value}", extra=extra)
            headers = {"WWW-Authenticate": "Bearer"}
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
            headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {type(exc).__name__}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": InternalError.PUBLIC_MESSAGE,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response (input values omitted)."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
