"""Error Hierarchy — typed, categorized exceptions for all geobookmarks failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are recoverable; infrastructure errors (500-level) are not
    - to_response() produces the REST envelope
    - The bookmark store never lets these escape a mutation: persistence and geocoding
      failures degrade to "starts empty" / "no name available"

Design Decisions:
    - Single hierarchy with GeoBookmarksError base: FastAPI global handler catches all
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    geohash: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class GeoBookmarksError(Exception):
    """Base exception for all geobookmarks errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "geohash": self.context.geohash,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidGeohashError(GeoBookmarksError):
    """Input does not normalize to a bookmarkable geohash."""
    def __init__(self, raw: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{raw}' is not a valid geohash",
            "INVALID_GEOHASH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.raw = raw


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GeoBookmarksError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class GeocodingError(GeoBookmarksError):
    """Reverse-geocoding service call failed."""
    def __init__(
        self, message: str, error_type: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Geocoding error ({error_type}): {message}",
            "GEOCODING_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.error_type = error_type
