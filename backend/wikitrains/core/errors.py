"""Error Hierarchy: typed, categorized exceptions for all WikiTrains failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; upstream/database errors (500-level) are not
    - to_response() produces REST envelope; to_event() produces the socket error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WikiTrainsError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - InvalidCommandError is raised by core and swallowed (logged) by the session handler,
      the client never receives it
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    connection_id: str | None = None
    title: str | None = None
    tier: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class WikiTrainsError(Exception):
    """Base exception for all WikiTrains errors."""

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
                    "connection_id": self.context.connection_id,
                    "title": self.context.title,
                    "tier": self.context.tier,
                },
            }
        }

    def to_event(self) -> dict:
        """Convert to socket error event."""
        return {
            "type": "error",
            "data": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "severity": self.severity.value,
                "recoverable": self.severity in (
                    ErrorSeverity.INFO, ErrorSeverity.WARNING,
                ),
            },
        }


# ─── Client / Game Errors (400-level) ───────────────────────────

class InvalidCommandError(WikiTrainsError):
    """Client command not allowed in the current game state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_COMMAND", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InsufficientLinksError(WikiTrainsError):
    """Source article links to fewer pages than the choices requested."""
    def __init__(
        self, title: str, available: int, required: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.title = title
        ctx.user_message = ctx.user_message or (
            f"'{title}' does not link to enough articles to continue."
        )
        super().__init__(
            f"'{title}' has {available} outbound link(s), {required} required",
            "INSUFFICIENT_LINKS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 422,
        )
        self.available = available
        self.required = required


class CandidatesExhaustedError(WikiTrainsError):
    """Candidate search hit its iteration cap before enough articles qualified."""
    def __init__(
        self, found: int, required: int, attempts: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or (
            "Not enough qualifying articles were found. Try another article."
        )
        super().__init__(
            f"Found {found}/{required} qualifying articles after {attempts} attempt(s)",
            "CANDIDATES_EXHAUSTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 422,
        )
        self.found = found
        self.required = required
        self.attempts = attempts


class ArticleNotCachedError(WikiTrainsError):
    """Requested cache slot is empty."""
    def __init__(self, tier: str, slot: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tier = tier
        super().__init__(
            f"No cached article at {tier}/{slot}",
            "ARTICLE_NOT_CACHED", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.slot = slot


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UpstreamUnavailableError(WikiTrainsError):
    """Wikipedia API call failed (network, timeout, bad status or body)."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_message = ctx.user_message or "Wikipedia is not responding right now."
        super().__init__(
            f"Wikipedia {operation} failed: {message}",
            "UPSTREAM_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class DatabaseError(WikiTrainsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
