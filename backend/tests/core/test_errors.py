"""Error Hierarchy — tests for catalog error taxonomy and envelopes.

Tests cover:
    - Each catalog error carries its FailureKind and HTTP status
    - UpstreamError message includes catalog details
    - to_response / to_sse_event envelope shape
"""

from priceboard.core.domain_types import FailureKind
from priceboard.core.errors import (
    CatalogError,
    DecodeError,
    ErrorCategory,
    ErrorContext,
    NetworkError,
    PriceboardError,
    ResourceNotFoundError,
    UpstreamError,
)


def test_network_error_kind_and_status():
    err = NetworkError("connection refused")
    assert isinstance(err, CatalogError)
    assert err.kind == FailureKind.NETWORK
    assert err.http_status == 503
    assert err.category == ErrorCategory.EXTERNAL_API


def test_decode_error_kind_and_status():
    err = DecodeError("body is not JSON")
    assert err.kind == FailureKind.DECODE
    assert err.http_status == 502
    assert err.code == "CATALOG_DECODE_ERROR"


def test_upstream_error_includes_details():
    err = UpstreamError(422, "Your query was invalid")
    assert err.kind == FailureKind.UPSTREAM
    assert err.status_code == 422
    assert "422" in err.message
    assert "Your query was invalid" in err.message


def test_upstream_error_without_details():
    err = UpstreamError(500)
    assert err.message == "Catalog returned HTTP 500"
    assert err.details is None


def test_resource_not_found_is_404():
    err = ResourceNotFoundError("Set", "zzz")
    assert isinstance(err, PriceboardError)
    assert err.http_status == 404
    assert "zzz" in err.message


def test_to_response_envelope():
    err = NetworkError("timeout", context=ErrorContext(url="https://x", set_code="aaa"))
    body = err.to_response()["error"]
    assert body["code"] == "CATALOG_NETWORK_ERROR"
    assert body["category"] == "external_api"
    assert body["context"] == {"set_code": "aaa", "url": "https://x"}
    assert body["failure_kind"] == "network_error"
    assert "upstream_status" not in body


def test_upstream_envelope_carries_catalog_status_and_details():
    body = UpstreamError(429, "Too many requests").to_response()["error"]
    assert body["failure_kind"] == "upstream_error"
    assert body["upstream_status"] == 429
    assert body["details"] == "Too many requests"


def test_resource_not_found_envelope_has_no_failure_kind():
    assert "failure_kind" not in ResourceNotFoundError("Set", "zzz").to_response()["error"]


def test_sse_event_marks_catalog_errors_recoverable():
    event = UpstreamError(503).to_sse_event()
    assert event["type"] == "error"
    assert event["data"]["recoverable"] is True


def test_sse_event_prefers_user_message():
    err = DecodeError("raw", context=ErrorContext(user_message="Try again later"))
    assert err.to_sse_event()["data"]["message"] == "Try again later"
