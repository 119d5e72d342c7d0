"""Error Hierarchy — typed, categorized exceptions for all SocialGraph failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors (400-level) carry safe, generic messages; internal errors (500-level)
      never expose store text, password hashes, or the signing secret
    - AuthenticationError.reason is for logs only — callers see one message per kind
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with SocialGraphError base: one FastAPI handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
    - DatabaseError subclasses InternalError: a store failure is surfaced as 500,
      the caller is never told which query failed
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class AuthFailureReason(str, Enum):
    """Why authentication failed. Logged, never branched on by callers."""
    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    BAD_CREDENTIALS = "bad_credentials"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SocialGraphError(Exception):
    """Base exception for all SocialGraph errors."""

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
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class ValidationError(SocialGraphError):
    """Malformed input, empty required field, or self-follow attempt."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationError(SocialGraphError):
    """Missing, malformed, expired or forged token; wrong login credentials."""

    GENERIC_MESSAGE = "Authentication required"

    def __init__(
        self,
        reason: AuthFailureReason,
        message: str = GENERIC_MESSAGE,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.reason = reason


class CredentialMismatchError(AuthenticationError):
    """Password does not match the stored hash (or the email is unknown)."""

    LOGIN_MESSAGE = "Invalid email or password"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            AuthFailureReason.BAD_CREDENTIALS, self.LOGIN_MESSAGE, context,
        )


class AuthorizationError(SocialGraphError):
    """Authenticated, but not the owner of the target resource."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"Not allowed to modify this {resource_type.lower()}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 403,
        )


class ResourceNotFoundError(SocialGraphError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class ConflictError(SocialGraphError):
    """Uniqueness violation or a toggle race the store could not resolve."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Internal Errors (500-level) ────────────────────────────────

class InternalError(SocialGraphError):
    """Failure unrelated to caller input (signing, store, driver)."""

    PUBLIC_MESSAGE = "An unexpected error occurred"

    def __init__(
        self, detail: str, code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            self.PUBLIC_MESSAGE, code, category,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {detail}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation
