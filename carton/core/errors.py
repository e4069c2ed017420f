"""Error Hierarchy — typed, categorized exceptions for all Carton failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Not-found and decode errors (400-level) are the caller's problem;
      storage and remote errors (500-level) are infrastructure failures
    - to_response() produces the REST error envelope
    - FieldDecodeError never escapes record decoding; it is recorded in DecodeReport

Design Decisions:
    - Single hierarchy with CartonError base: FastAPI global handler catches all
    - ErrorContext as dataclass: carries component/payload ids for structured logs
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
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    component_id: str | None = None
    payload_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CartonError(Exception):
    """Base exception for all Carton errors."""

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
                    "component_id": self.context.component_id,
                    "payload_id": self.context.payload_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ComponentNotFoundError(CartonError):
    """Component row absent from the components table."""
    def __init__(self, component_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.component_id = component_id
        super().__init__(
            f"Component '{component_id}' not found",
            "COMPONENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.component_id = component_id


class PayloadDecodeError(CartonError):
    """Inbound payload (or remote request body) could not be parsed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to parse the payload message: {message}",
            "PAYLOAD_DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class FieldDecodeError(CartonError):
    """A single encoded column element does not match its target shape."""
    def __init__(self, message: str, shape: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot decode {shape}: {message}",
            "FIELD_DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.shape = shape

    @classmethod
    def from_validation(cls, exc: Exception, shape: str) -> "FieldDecodeError":
        """Build from a pydantic ValidationError, keeping only the first problem."""
        errors = exc.errors() if hasattr(exc, "errors") else []
        if not errors:
            return cls(str(exc), shape)
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        return cls(f"{loc}: {first['msg']}" if loc else first["msg"], shape)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CartonError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class RemoteFetchError(CartonError):
    """Remote request authority could not be reached or answered with an error."""
    def __init__(
        self, message: str, stage: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Remote fetch failed ({stage}): {message}",
            "REMOTE_FETCH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.stage = stage


class EventNotifyError(CartonError):
    """Status event could not be delivered."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Event notification failed: {message}",
            "EVENT_NOTIFY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )
