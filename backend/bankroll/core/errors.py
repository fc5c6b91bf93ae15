"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - "No investment" is NOT an error — services return None for absence
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with BankrollError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - InvestmentExistsError is its own CONFLICT type so callers can redirect to the
      increment path instead of treating it as a generic failure
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class BankrollError(Exception):
    """Base exception for all ledger errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "recoverable": self.recoverable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvestmentValidationError(BankrollError):
    """Caller-supplied investment data violates a precondition."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvestmentExistsError(BankrollError):
    """User already holds an investment; top-ups go through increment_amount."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = ctx.user_id or user_id
        super().__init__(
            f"User '{user_id}' already has an investment",
            "INVESTMENT_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class ResourceNotFoundError(BankrollError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BankrollError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
