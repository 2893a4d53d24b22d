"""Error Handlers — global exception handlers for the todo API.

Invariants:
    - TodoServiceError → structured JSON with error code, message, severity
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TodoServiceError), validation (Pydantic), catch-all (Exception)
    - Store errors are expected outcomes, logged at WARNING; only the catch-all logs at ERROR
    - Validation envelopes carry the same context.todo_id slot as store errors, filled
      from the route path when the request targets one todo
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from todo_service.core.errors import ErrorCategory, ErrorSeverity, TodoServiceError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_todo_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_todo_error_handler(app: FastAPI) -> None:
    """Register todo store error handler."""

    @app.exception_handler(TodoServiceError)
    async def todo_error_handler(request: Request, exc: TodoServiceError):
        """Handle all todo store errors."""
        logger.warning(
            f"TodoServiceError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "todo_id": exc.context.todo_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors, naming the todo id from the path."""
        todo_id = _path_todo_id(request)
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "todo_id": todo_id},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc, todo_id),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _path_todo_id(request: Request) -> int | str | None:
    """Todo id from the route path, as an int when it parses, else the raw segment."""
    raw = request.path_params.get("todo_id")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def _build_validation_error_response(
    exc: RequestValidationError, todo_id: int | str | None = None,
) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "context": {"todo_id": todo_id},
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
