"""Aggregation Events — the only inputs the reducer accepts.

Invariants:
    - Every event carries the generation of the initiate() call that produced it
    - Events are frozen: the orchestrator emits, the reducer reads, nobody mutates
    - FetchFailed is terminal for its chain (no further events for that set code)

Design Decisions:
    - One dataclass per event over a tagged dict: exhaustive match in the reducer,
      typed fields instead of optional payloads
"""

from dataclasses import dataclass

from priceboard.core.domain_types import (
    EventType, FailureKind, Generation, RequestUrl, SetCode,
)
from priceboard.core.records import CardRecord


@dataclass(frozen=True)
class Reset:
    generation: Generation
    type: EventType = EventType.RESET


@dataclass(frozen=True)
class RequestStarted:
    generation: Generation
    url: RequestUrl
    set_code: SetCode
    type: EventType = EventType.REQUEST_STARTED


@dataclass(frozen=True)
class PageFetched:
    generation: Generation
    set_code: SetCode
    records: tuple[CardRecord, ...]
    type: EventType = EventType.PAGE_FETCHED


@dataclass(frozen=True)
class RequestCompleted:
    generation: Generation
    url: RequestUrl
    type: EventType = EventType.REQUEST_COMPLETED


@dataclass(frozen=True)
class FetchFailed:
    generation: Generation
    url: RequestUrl
    set_code: SetCode
    kind: FailureKind
    reason: str
    type: EventType = EventType.FETCH_FAILED


AggregationEvent = Reset | RequestStarted | PageFetched | RequestCompleted | FetchFailed
