"""Error Hierarchy — typed, categorized exceptions for all StructureSync failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Resolution errors are fatal per request: no partial schema or artifact survives them
    - Promotion events are NOT errors (see PromotionWarning in schema_models.py)
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StructureSyncError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERMISSION = "permission"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    category_name: str | None = None
    selection: list[str] | None = None
    debug_info: dict[str, Any] | None = None


class StructureSyncError(Exception):
    """Base exception for all StructureSync errors."""

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
                    "category_name": self.context.category_name,
                    "selection": self.context.selection,
                },
            }
        }


# ─── Resolution Errors (400-level) ──────────────────────────────

class UnknownCategoryError(StructureSyncError):
    """Category (or an ancestor it names) has no schema in the store."""
    def __init__(
        self,
        category_name: str,
        referenced_by: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.category_name = ctx.category_name or category_name
        message = f"Category '{category_name}' has no schema"
        if referenced_by:
            message += f" (parent of '{referenced_by}')"
        super().__init__(
            message, "UNKNOWN_CATEGORY", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.category_name = category_name
        self.referenced_by = referenced_by


class CyclicInheritanceError(StructureSyncError):
    """A category reappears in its own ancestor chain."""
    def __init__(self, chain: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.category_name = ctx.category_name or (chain[0] if chain else None)
        super().__init__(
            f"Circular inheritance detected: {' -> '.join(chain)}",
            "CYCLIC_INHERITANCE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.chain = chain


class EmptySelectionError(StructureSyncError):
    """Multi-category resolution requested with no categories."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "At least one category must be selected",
            "EMPTY_SELECTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class SchemaValidationError(StructureSyncError):
    """Schema document failed structural or reference validation."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"errors": errors}
        super().__init__(
            f"Schema document is invalid ({len(errors)} error(s))",
            "SCHEMA_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.errors
        return response


class SchemaLoadError(StructureSyncError):
    """Schema document could not be read or parsed."""
    def __init__(self, message: str, source: str = "document", context: ErrorContext | None = None):
        super().__init__(
            f"Cannot load schema from {source}: {message}",
            "SCHEMA_LOAD_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.source = source


class PermissionDeniedError(StructureSyncError):
    """Caller lacks edit permission for a generating or mutating request."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Edit permission required to {action}",
            "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )
        self.action = action


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StructureSyncError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
