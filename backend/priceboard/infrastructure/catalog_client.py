"""Card Catalog Client — wraps httpx.AsyncClient with error mapping and payload decoding.

Invariants:
    - Transport failures (connect, read, timeout): NetworkError
    - Non-2xx responses: UpstreamError with the catalog's "details" text when present
    - Non-JSON bodies, schema mismatches or unusable urls: DecodeError
    - A search that matches nothing (404 + code "not_found") is an empty final page
    - No retry, no backoff, no rate limiting — one request per call
    - continuation URLs are requested verbatim

Design Decisions:
    - Wrapper over raw client: isolates error mapping from the orchestrator
    - One shared AsyncClient per process: connection pool reused across chains
    - Optional transport injection: tests use httpx.MockTransport, no network
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from priceboard.core.domain_types import RequestUrl
from priceboard.core.errors import DecodeError, ErrorContext, NetworkError, UpstreamError
from priceboard.core.records import CardPage, SourceSet
from priceboard.schemas.catalog import CardPagePayload, SetListPayload

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

# The catalog answers an empty search with 404 rather than an empty list
_NO_MATCHES_STATUS = 404
_NO_MATCHES_CODE = "not_found"


class CatalogHttpClient:
    """Async card catalog client. Raises only CatalogError subclasses."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float | None = None,
        user_agent: str = "priceboard/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        )

    async def fetch_page(self, url: RequestUrl) -> CardPage:
        """Fetch and decode one page of a card search."""
        context = ErrorContext(url=url)
        response = await self._get(url, context)
        if self._is_empty_search(response):
            logger.debug("Search matched no cards", extra={"url": url})
            return CardPage(records=(), has_more=False)
        payload = self._decode(CardPagePayload, self._json(response, context), context)
        return payload.to_domain()

    async def list_sets(self) -> list[SourceSet]:
        """Fetch every set descriptor the catalog knows about."""
        url = f"{self.base_url}/sets"
        context = ErrorContext(url=url)
        response = await self._get(url, context)
        payload = self._decode(SetListPayload, self._json(response, context), context)
        return [s.to_domain() for s in payload.data]

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "CatalogHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(self, url: str, context: ErrorContext) -> httpx.Response:
        """GET with transport and status errors mapped to the catalog taxonomy."""
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise NetworkError(f"timeout ({type(e).__name__})", context=context)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            # Continuation links come from the catalog body
            raise DecodeError(f"unusable url ({e})", context=context)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or type(e).__name__, context=context)

        if response.is_success or self._is_empty_search(response):
            return response

        details = _error_details(response)
        logger.warning(
            f"Catalog returned HTTP {response.status_code}",
            extra={"url": url, "status_code": response.status_code},
        )
        raise UpstreamError(response.status_code, details, context=context)

    def _json(self, response: httpx.Response, context: ErrorContext) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"body is not JSON ({e})", context=context)

    def _decode(
        self, model: type[PayloadT], data: Any, context: ErrorContext,
    ) -> PayloadT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"{e.error_count()} schema error(s) in {model.__name__}",
                context=ErrorContext(url=context.url, debug_info={"errors": e.errors()}),
            )

    def _is_empty_search(self, response: httpx.Response) -> bool:
        if response.status_code != _NO_MATCHES_STATUS:
            return False
        body = _safe_json(response)
        return isinstance(body, dict) and body.get("code") == _NO_MATCHES_CODE


def _safe_json(response: httpx.Response) -> Any:
    """Best-effort JSON body for error inspection (None when not JSON)."""
    try:
        return response.json()
    except ValueError:
        return None


def _error_details(response: httpx.Response) -> str | None:
    body = _safe_json(response)
    if isinstance(body, dict):
        details = body.get("details")
        if isinstance(details, str):
            return details
    return None
