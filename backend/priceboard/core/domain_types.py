"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SetCode is always lower case and stripped (see normalize_set_code)
    - RequestUrl is the verbatim URL of one page fetch (the pending-request id)
    - Generation increases monotonically per orchestrator, starting at 0
    - All failure kinds encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API + SSE payloads)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SetCode = NewType("SetCode", str)
RequestUrl = NewType("RequestUrl", str)
Generation = NewType("Generation", int)


# ─── Enums ───────────────────────────────────────────────────────

class FailureKind(str, Enum):
    """Why a page fetch failed. Closed taxonomy surfaced to clients."""
    NETWORK = "network_error"
    DECODE = "decode_error"
    UPSTREAM = "upstream_error"


class EventType(str, Enum):
    """Orchestrator → reducer event names (used for logging and SSE)."""
    RESET = "reset"
    REQUEST_STARTED = "request_started"
    PAGE_FETCHED = "page_fetched"
    REQUEST_COMPLETED = "request_completed"
    FETCH_FAILED = "fetch_failed"


def normalize_set_code(raw: str) -> SetCode:
    """Catalog set codes are case-insensitive; store them lower case."""
    return SetCode(raw.strip().lower())
