"""Error Hierarchy - typed, categorized exceptions for all Keydrop failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error maps to exactly one HTTP status (400, 401, 403, 404, 405, 409, 500)
    - The store and repositories raise nothing outside this hierarchy
    - to_response() produces the REST envelope consumed by the API error handlers

Design Decisions:
    - Single hierarchy with KeydropError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Closed subclass set, one per status: callers branch on type, never on a status field
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class KeydropError(Exception):
    """Base exception for all Keydrop errors."""

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
                "context": {
                    "collection": self.context.collection,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Boundary Errors (400-level, raised by the API layer) ───────

class BadRequestError(KeydropError):
    """Request is malformed or fails validation."""
    def __init__(
        self, message: str = "Bad Request", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(KeydropError):
    """Caller is not authenticated."""
    def __init__(
        self, message: str = "Unauthorized", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(KeydropError):
    """Caller is authenticated but not permitted."""
    def __init__(
        self, message: str = "Forbidden", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class NotAllowedError(KeydropError):
    """HTTP method not supported on this route."""
    def __init__(
        self, message: str = "Method Not Allowed", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "METHOD_NOT_ALLOWED", ErrorCategory.METHOD_NOT_ALLOWED,
            ErrorSeverity.WARNING, context, 405,
        )


# ─── Store Errors ───────────────────────────────────────────────

class ResourceNotFoundError(KeydropError):
    """Requested resource does not exist."""
    def __init__(
        self, message: str = "Not Found", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ConflictError(KeydropError):
    """Proposed identity or unique value already exists."""
    def __init__(
        self, message: str = "Conflict", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class InternalError(KeydropError):
    """I/O, serialization or crypto failure."""
    def __init__(
        self, message: str = "Internal Server Error", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
