"""Aggregation Store — single owner of AggregateState, applies events through the reducer.

Invariants:
    - state only changes inside dispatch(), and only via core.reducer.reduce
    - dispatch() is synchronous: called on the event loop, applied atomically
    - Subscribers receive every distinct state after it is applied, in order
    - A dropped (stale or no-op) event produces no notification

Design Decisions:
    - asyncio.Queue per subscriber: SSE streams consume at their own pace
      without blocking dispatch (queues are unbounded)
    - Identity check on the reducer result: reduce() returns the same object
      for no-op transitions, so unchanged state is never re-broadcast
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from priceboard.core.aggregate_state import AggregateState
from priceboard.core.events import AggregationEvent, FetchFailed, PageFetched
from priceboard.core.reducer import reduce

logger = logging.getLogger(__name__)


class AggregationStore:
    """Holds the current AggregateState and fans out changes."""

    def __init__(self, initial: AggregateState | None = None):
        self._state = initial or AggregateState()
        self._subscribers: set[asyncio.Queue[AggregateState]] = set()

    @property
    def state(self) -> AggregateState:
        return self._state

    def dispatch(self, event: AggregationEvent) -> None:
        """Apply one event and notify subscribers when the state changed."""
        previous = self._state
        self._state = reduce(previous, event)
        if self._state is previous:
            return
        self._log_transition(event)
        for queue in self._subscribers:
            queue.put_nowait(self._state)

    async def subscribe(self) -> AsyncIterator[AggregateState]:
        """Yield the current state, then every subsequent change."""
        queue: asyncio.Queue[AggregateState] = asyncio.Queue()
        self._subscribers.add(queue)
        try:
            yield self._state
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _log_transition(self, event: AggregationEvent) -> None:
        if isinstance(event, FetchFailed):
            logger.warning(
                f"Fetch failed for set {event.set_code}: {event.reason}",
                extra={
                    "set_code": event.set_code,
                    "url": event.url,
                    "failure_kind": event.kind.value,
                    "generation": event.generation,
                },
            )
        elif isinstance(event, PageFetched):
            logger.debug(
                "Merged page",
                extra={
                    "set_code": event.set_code,
                    "record_count": len(event.records),
                    "generation": event.generation,
                },
            )