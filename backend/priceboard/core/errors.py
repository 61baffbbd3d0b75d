"""Error Hierarchy — typed, categorized exceptions for all Priceboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Catalog errors carry a FailureKind: network_error, decode_error, upstream_error
    - to_response() produces REST envelope; to_sse_event() produces SSE envelope
    - Catalog envelopes name their failure_kind; upstream ones add status and details
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PriceboardError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - CatalogError.kind mirrors FetchFailed.kind so the orchestrator forwards it as-is
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from priceboard.core.domain_types import FailureKind


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
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    set_code: str | None = None
    url: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class PriceboardError(Exception):
    """Base exception for all Priceboard errors."""

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
                    "set_code": self.context.set_code,
                    "url": self.context.url,
                },
            }
        }

    def to_sse_event(self) -> dict:
        """Convert to SSE error event."""
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


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(PriceboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Catalog Errors (500-level) ─────────────────────────────────

class CatalogError(PriceboardError):
    """Card catalog call failed. Subclasses fix the FailureKind."""
    kind: FailureKind

    def __init__(
        self,
        message: str,
        code: str,
        context: ErrorContext | None = None,
        http_status: int = 502,
    ):
        super().__init__(
            message, code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, http_status,
        )

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["failure_kind"] = self.kind.value
        return response


class NetworkError(CatalogError):
    """Transport failure: connect, read or timeout."""
    kind = FailureKind.NETWORK

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Catalog unreachable: {message}", "CATALOG_NETWORK_ERROR",
            context, 503,
        )


class UpstreamError(CatalogError):
    """Catalog answered with a non-2xx status."""
    kind = FailureKind.UPSTREAM

    def __init__(
        self,
        status_code: int,
        details: str | None = None,
        context: ErrorContext | None = None,
    ):
        message = f"Catalog returned HTTP {status_code}"
        if details:
            message = f"{message}: {details}"
        super().__init__(message, "CATALOG_UPSTREAM_ERROR", context, 502)
        self.status_code = status_code
        self.details = details

    def to_response(self) -> dict:
        """Envelope plus the catalog's own status and details."""
        response = super().to_response()
        response["error"]["upstream_status"] = self.status_code
        response["error"]["details"] = self.details
        return response


class DecodeError(CatalogError):
    """Catalog body was not JSON or did not match the expected schema."""
    kind = FailureKind.DECODE

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed catalog response: {message}", "CATALOG_DECODE_ERROR",
            context, 502,
        )
