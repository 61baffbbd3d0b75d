"""Aggregation Reducer — pure state machine from events to AggregateState.

Invariants:
    - reduce() never mutates its input; it returns a new state or the same object
    - Events from a generation other than state.generation are dropped (Reset excepted)
    - PageFetched re-filters and re-sorts the whole accumulated set, so the result
      does not depend on the order pages arrive in
    - Removing a url that is not pending is a no-op, never an error
    - FetchFailed clears the url from pending_requests and keeps merged records

Design Decisions:
    - match on event class over a type-string switch: unknown events fail loudly
      in the default arm instead of silently passing through
    - Stable descending sort: equal prices keep merge order (accumulated first,
      then incoming page order)
"""

import logging
from dataclasses import replace
from decimal import Decimal
from collections.abc import Iterable

from priceboard.core.aggregate_state import AggregateState, FailureMarker
from priceboard.core.events import (
    AggregationEvent,
    FetchFailed,
    PageFetched,
    RequestCompleted,
    RequestStarted,
    Reset,
)
from priceboard.core.records import CardRecord

logger = logging.getLogger(__name__)


def filter_has_price(cards: Iterable[CardRecord]) -> list[CardRecord]:
    """Keep records whose price is present. "0" is present."""
    return [c for c in cards if c.price is not None]


def sort_by_price_desc(cards: Iterable[CardRecord]) -> list[CardRecord]:
    """Sort priced records by numeric price, highest first. Stable on ties."""
    return sorted(cards, key=_price_key, reverse=True)


def _price_key(card: CardRecord) -> Decimal:
    return card.price_value  # type: ignore[return-value]  # filtered before sort


def merge_records(
    current: Iterable[CardRecord], incoming: Iterable[CardRecord],
) -> tuple[CardRecord, ...]:
    """cards := sortDesc(filterHasPrice(cards ++ records))."""
    combined = [*current, *incoming]
    return tuple(sort_by_price_desc(filter_has_price(combined)))


def is_stale(state: AggregateState, event: AggregationEvent) -> bool:
    """True when the event belongs to a superseded initiate() call."""
    return not isinstance(event, Reset) and event.generation != state.generation


def reduce(state: AggregateState, event: AggregationEvent) -> AggregateState:
    """Apply one event. Pure — returns the next state."""
    if is_stale(state, event):
        logger.debug(
            "Dropping stale event",
            extra={"generation": event.generation, "event_type": event.type.value},
        )
        return state

    match event:
        case Reset(generation=generation):
            return AggregateState(generation=generation)

        case RequestStarted(url=url):
            return replace(state, pending_requests=state.pending_requests | {url})

        case PageFetched(records=records):
            if not records:
                return state
            return replace(state, cards=merge_records(state.cards, records))

        case RequestCompleted(url=url):
            if url not in state.pending_requests:
                return state
            return replace(state, pending_requests=state.pending_requests - {url})

        case FetchFailed(url=url, set_code=set_code, kind=kind, reason=reason):
            marker = FailureMarker(set_code=set_code, url=url, kind=kind, reason=reason)
            return replace(
                state,
                pending_requests=state.pending_requests - {url},
                failures=(*state.failures, marker),
            )

        case _:
            raise TypeError(f"Unknown aggregation event: {event!r}")
