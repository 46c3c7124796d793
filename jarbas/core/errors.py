"""Error Hierarchy — typed, categorized exceptions and the RejectionSet value.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are scoped to one request; infrastructure errors (500-level) are critical
    - A RejectionSet keeps field errors in insertion order; messages are never rewritten
    - to_response() always carries an "errors" mapping of field -> [messages]
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with JarbasError base: FastAPI global handler catches all
    - RejectionSet is a plain value built incrementally by services; it is only
      raised (wrapped in RejectedError) after every applicable check ran
    - Named single-cause subclasses (UserNotFoundError, ...) build a one-entry
      RejectionSet so every rejection has the same response shape
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
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    goal_id: int | None = None


@dataclass(frozen=True)
class FieldError:
    """One named violation inside a RejectionSet."""
    field: str
    code: str
    message: str
    category: ErrorCategory = ErrorCategory.VALIDATION


@dataclass
class RejectionSet:
    """Ordered field errors collected during one request."""
    errors: list[FieldError] = field(default_factory=list)

    def add(
        self,
        field_name: str,
        code: str,
        message: str,
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ) -> None:
        self.errors.append(FieldError(field_name, code, message, category))

    def add_many(
        self,
        field_name: str,
        code: str,
        messages: list[str],
        category: ErrorCategory = ErrorCategory.VALIDATION,
    ) -> None:
        for message in messages:
            self.add(field_name, code, message, category)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def codes(self) -> list[str]:
        """Distinct error codes, first-seen order."""
        return list(dict.fromkeys(e.code for e in self.errors))

    def by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for e in self.errors:
            grouped.setdefault(e.field, []).append(e.message)
        return grouped

    def http_status(self) -> int:
        categories = {e.category for e in self.errors}
        if ErrorCategory.RESOURCE_NOT_FOUND in categories:
            return 404
        if ErrorCategory.AUTHENTICATION in categories:
            return 401
        if ErrorCategory.VALIDATION in categories:
            return 400
        if ErrorCategory.CONFLICT in categories:
            return 409
        return 400

    def primary_category(self) -> ErrorCategory:
        status_to_category = {
            404: ErrorCategory.RESOURCE_NOT_FOUND,
            401: ErrorCategory.AUTHENTICATION,
            409: ErrorCategory.CONFLICT,
        }
        return status_to_category.get(self.http_status(), ErrorCategory.VALIDATION)

    def raise_if_any(self, context: "ErrorContext | None" = None) -> None:
        if self.errors:
            raise RejectedError(self, context)


class JarbasError(Exception):
    """Base exception for all Jarbas errors."""

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

    def field_errors(self) -> dict[str, list[str]]:
        return {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "errors": self.field_errors(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RejectedError(JarbasError):
    """Request rejected with one or more field errors."""
    def __init__(self, rejections: RejectionSet, context: ErrorContext | None = None):
        codes = rejections.codes
        if len(rejections) == 1:
            code, message = codes[0], rejections.errors[0].message
        else:
            code = codes[0] if len(codes) == 1 else "REQUEST_REJECTED"
            message = f"Request rejected with {len(rejections)} field error(s)"
        super().__init__(
            message, code, rejections.primary_category(),
            ErrorSeverity.ERROR, context, rejections.http_status(),
        )
        self.rejections = rejections

    def field_errors(self) -> dict[str, list[str]]:
        return self.rejections.by_field()

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": e.field, "code": e.code, "message": e.message}
            for e in self.rejections.errors
        ]
        return response


def _single(
    field_name: str, code: str, message: str, category: ErrorCategory,
) -> RejectionSet:
    rejections = RejectionSet()
    rejections.add(field_name, code, message, category)
    return rejections


class UserNotFoundError(RejectedError):
    """User id or email does not resolve."""
    def __init__(self, user_ref: str, context: ErrorContext | None = None):
        super().__init__(
            _single(
                "user", "USER_NOT_FOUND", f"User '{user_ref}' not found",
                ErrorCategory.RESOURCE_NOT_FOUND,
            ),
            context,
        )


class GoalNotFoundError(RejectedError):
    """Goal id does not resolve."""
    def __init__(self, goal_id: int, context: ErrorContext | None = None):
        super().__init__(
            _single(
                "goal", "GOAL_NOT_FOUND", f"Goal '{goal_id}' not found",
                ErrorCategory.RESOURCE_NOT_FOUND,
            ),
            context,
        )


class CurrencyNotFoundError(RejectedError):
    """Currency id does not resolve."""
    def __init__(self, currency_id: int, context: ErrorContext | None = None):
        super().__init__(
            _single(
                "currency", "CURRENCY_NOT_FOUND",
                f"Currency '{currency_id}' not found",
                ErrorCategory.RESOURCE_NOT_FOUND,
            ),
            context,
        )


class IdentifierMismatchError(RejectedError):
    """Path identifier differs from the body identifier."""
    def __init__(self, path_id: object, body_id: object, context: ErrorContext | None = None):
        super().__init__(
            _single(
                "id", "IDENTIFIER_MISMATCH",
                f"Path id '{path_id}' does not match body id '{body_id}'",
                ErrorCategory.CONFLICT,
            ),
            context,
        )


class InvalidCredentialsError(RejectedError):
    """Email/password pair does not match a stored credential."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            _single(
                "password", "INVALID_CREDENTIALS", "Invalid email or password",
                ErrorCategory.AUTHENTICATION,
            ),
            context,
        )


class ConstraintViolationError(JarbasError):
    """A write broke a unique or foreign-key constraint (e.g. a check-then-insert race)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Write conflicts with existing data", "CONSTRAINT_VIOLATION",
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context, 409,
        )


class ConcurrencyError(JarbasError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(JarbasError):
    """Database operation failed."""
    def __init__(self, message: str, kind: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database error ({kind}): {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.kind = kind
