"""Fetch Orchestrator — one concurrent pagination chain per selected set.

Invariants:
    - initiate() bumps the generation, dispatches Reset, then starts one task per set
    - Within a chain pages are strictly sequential (next request only after the
      current page resolves)
    - Per page: PageFetched(n) → RequestStarted(n+1) if has_more → RequestCompleted(n)
    - Every RequestStarted url is cleared exactly once: RequestCompleted or FetchFailed
    - Chains of a superseded generation keep running; the reducer drops their events

Design Decisions:
    - Explicit while loop per chain instead of recursion: long continuation chains
      do not grow the call stack
    - RequestStarted(n+1) before RequestCompleted(n): pending_requests never empties
      between two pages of the same chain, so "loading" never flickers off early
    - Error boundary maps CatalogError to its own kind; anything else the client
      raises becomes a decode failure so the url never stays pending.
      CancelledError is a BaseException and passes through
    - A next_page already fetched in this chain fails the chain instead of looping
    - Task references held in a set until done (asyncio keeps only weak refs)
"""

import asyncio
import logging
from collections.abc import Iterable

from priceboard.core.catalog_protocols import CatalogClient, EventSink
from priceboard.core.catalog_queries import DEFAULT_MIN_PRICE_EUR, build_search_url
from priceboard.core.domain_types import FailureKind, Generation, RequestUrl, SetCode
from priceboard.core.errors import CatalogError
from priceboard.core.events import (
    FetchFailed,
    PageFetched,
    RequestCompleted,
    RequestStarted,
    Reset,
)

logger = logging.getLogger(__name__)


class FetchOrchestrator:
    """Starts pagination chains and turns their progress into events."""

    def __init__(
        self,
        client: CatalogClient,
        sink: EventSink,
        base_url: str,
        min_price_eur: str = DEFAULT_MIN_PRICE_EUR,
    ):
        self.client = client
        self.sink = sink
        self.base_url = base_url
        self.min_price_eur = min_price_eur
        self._generation = Generation(0)
        self._tasks: set[asyncio.Task] = set()

    @property
    def generation(self) -> Generation:
        return self._generation

    @property
    def active_chains(self) -> int:
        return len(self._tasks)

    def initiate(self, set_codes: Iterable[SetCode]) -> Generation:
        """Reset aggregation and start one chain per set. Returns the new generation.

        Must be called from the running event loop.
        """
        self._generation = Generation(self._generation + 1)
        generation = self._generation
        self.sink.dispatch(Reset(generation))

        codes = list(dict.fromkeys(set_codes))
        logger.info(
            f"Starting {len(codes)} pagination chain(s)",
            extra={"generation": generation},
        )
        for set_code in codes:
            url = build_search_url(self.base_url, set_code, self.min_price_eur)
            # Registered synchronously so loading is visible before any await
            self.sink.dispatch(RequestStarted(generation, url, set_code))
            task = asyncio.create_task(
                self._run_chain(generation, set_code, url),
                name=f"chain-{generation}-{set_code}",
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return generation

    async def drain(self) -> None:
        """Wait until every chain started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def shutdown(self) -> None:
        """Cancel outstanding chains. Process exit only."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run_chain(
        self, generation: Generation, set_code: SetCode, url: RequestUrl,
    ) -> None:
        """Fetch pages for one set until has_more is false or a page fails.

        The caller has already dispatched RequestStarted for the first url.
        """
        page_number = 1
        seen: set[RequestUrl] = set()
        current: RequestUrl | None = url
        while current is not None:
            seen.add(current)
            try:
                page = await self.client.fetch_page(current)
            except CatalogError as e:
                self.sink.dispatch(FetchFailed(
                    generation, current, set_code, e.kind, e.message,
                ))
                return
            except Exception as e:
                logger.error(
                    f"Unexpected error fetching page {page_number} of set {set_code}",
                    exc_info=True,
                    extra={"set_code": set_code, "url": current, "generation": generation},
                )
                self.sink.dispatch(FetchFailed(
                    generation, current, set_code, FailureKind.DECODE,
                    str(e) or type(e).__name__,
                ))
                return

            logger.debug(
                "Page fetched",
                extra={
                    "set_code": set_code,
                    "page": page_number,
                    "record_count": len(page.records),
                    "generation": generation,
                },
            )
            self.sink.dispatch(PageFetched(generation, set_code, page.records))

            following = page.next_url if page.has_more else None
            if following in seen:
                self.sink.dispatch(FetchFailed(
                    generation, current, set_code, FailureKind.DECODE,
                    "next_page revisits a page already fetched",
                ))
                return
            if following is not None:
                self.sink.dispatch(RequestStarted(generation, following, set_code))
            self.sink.dispatch(RequestCompleted(generation, current))

            current = following
            page_number += 1

        logger.info(
            f"Chain for set {set_code} exhausted after {page_number - 1} page(s)",
            extra={"set_code": set_code, "generation": generation},
        )
