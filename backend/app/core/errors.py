"""Error Hierarchy — typed, categorized exceptions for every expense failure mode.

Invariants:
    - Every error has a kind (ErrorKind), category (ErrorCategory), severity (ErrorSeverity)
    - Errors are compared by kind, never by message text or identity
    - wrap() keeps class and kind; only the message accumulates operation context
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ExpensesError base: FastAPI global handler catches all
    - ErrorKind is the closed set of failure variants; code == kind.value
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
    TIMEOUT = "timeout"


class ErrorKind(str, Enum):
    """Closed set of failure variants surfaced by the expense core."""
    INVALID_DESCRIPTION = "INVALID_DESCRIPTION"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    INVALID_DATE = "INVALID_DATE"
    EXPENSE_NOT_FOUND = "EXPENSE_NOT_FOUND"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    STORAGE_ERROR = "STORAGE_ERROR"
    STORAGE_TIMEOUT = "STORAGE_TIMEOUT"


VALIDATION_KINDS = frozenset({
    ErrorKind.INVALID_DESCRIPTION,
    ErrorKind.INVALID_AMOUNT,
    ErrorKind.INVALID_CATEGORY,
    ErrorKind.INVALID_DATE,
})

_VALIDATION_MESSAGES = {
    ErrorKind.INVALID_DESCRIPTION: "invalid description: cannot be empty",
    ErrorKind.INVALID_AMOUNT: "invalid amount: must be greater than 0",
    ErrorKind.INVALID_CATEGORY: "invalid category: cannot be empty",
    ErrorKind.INVALID_DATE: "invalid date: cannot be zero",
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expense_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ExpensesError(Exception):
    """Base exception for all expense service errors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def code(self) -> str:
        return self.kind.value

    def is_kind(self, kind: ErrorKind) -> bool:
        return self.kind is kind

    def wrap(self, operation: str) -> "ExpensesError":
        """Copy of this error with operation context prepended to the message.

        Class, kind, category and context are preserved so callers further up
        can still branch on the kind. Raise the result `from` the original.
        """
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        wrapped.message = f"{operation}: {self.message}"
        Exception.__init__(wrapped, wrapped.message)
        return wrapped

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
                    "expense_id": self.context.expense_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ExpenseValidationError(ExpensesError):
    """An expense field violates a business rule."""
    def __init__(self, kind: ErrorKind, context: ErrorContext | None = None):
        if kind not in VALIDATION_KINDS:
            raise ValueError(f"{kind} is not a validation kind")
        super().__init__(
            _VALIDATION_MESSAGES[kind], kind, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ExpenseNotFoundError(ExpensesError):
    """Identifier has no corresponding expense record."""
    def __init__(self, expense_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.expense_id = str(expense_id)
        super().__init__(
            "expense not found", ErrorKind.EXPENSE_NOT_FOUND,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, ctx, 404,
        )


class InvalidIdentifierError(ExpensesError):
    """Identifier string is not a well-formed expense id; a generic server error at the HTTP boundary."""
    def __init__(self, raw_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"raw_id": raw_id}
        super().__init__(
            "invalid UUID format", ErrorKind.INVALID_IDENTIFIER,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, ctx, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(ExpensesError):
    """Underlying store failed (connectivity, constraint violation, driver)."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        kind: ErrorKind = ErrorKind.STORAGE_ERROR,
        category: ErrorCategory = ErrorCategory.DATABASE,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"storage {operation} failed: {message}", kind, category,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class StorageTimeoutError(StorageError):
    """Execution context deadline passed before the store answered."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "deadline exceeded", operation, context,
            kind=ErrorKind.STORAGE_TIMEOUT, category=ErrorCategory.TIMEOUT,
        )
