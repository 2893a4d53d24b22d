"""Error Hierarchy — typed, categorized exceptions for every store failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Store errors are 400-level and terminal for the single request that raised them
    - to_response() produces REST envelope; to_sse_event() produces watch stream envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TodoServiceError base: FastAPI global handler catches all
      (ADR: uniform error shape for unary calls and watch streams)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    todo_id: int | None = None


class TodoServiceError(Exception):
    """Base exception for all todo service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {"todo_id": self.context.todo_id},
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to terminal watch stream error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.message,
                "severity": self.severity.value,
                "todo_id": self.context.todo_id,
            },
        }


# ─── Store Errors (400-level) ───────────────────────────────────

class InvalidArgumentError(TodoServiceError):
    """Required identifier missing from the request payload."""
    def __init__(self, message: str, field: str = "id", context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        """REST envelope naming the offending request field."""
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class AlreadyExistsError(TodoServiceError):
    """Add collided with an existing key. Adds never overwrite."""
    def __init__(self, todo_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.todo_id = todo_id
        super().__init__(
            "Todo with this Id already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class NotFoundError(TodoServiceError):
    """Operation referenced a key absent from the store.

    Also the terminal event of a watch whose todo was removed.
    """
    def __init__(self, todo_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.todo_id = todo_id
        super().__init__(
            "Corresponding todo not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
