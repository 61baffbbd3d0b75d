"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All catalog IO accessed through CatalogClient
    - CatalogClient raises only CatalogError subclasses (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, the test fake needs no base class
    - EventSink is synchronous: dispatch runs on the event loop between awaits,
      so each event is applied atomically without locks
"""

from typing import Protocol

from priceboard.core.domain_types import RequestUrl
from priceboard.core.events import AggregationEvent
from priceboard.core.records import CardPage, SourceSet


class CatalogClient(Protocol):
    """Contract for the remote card catalog — implemented by infrastructure."""
    async def fetch_page(self, url: RequestUrl) -> CardPage: ...
    async def list_sets(self) -> list[SourceSet]: ...


class EventSink(Protocol):
    """Anything that accepts aggregation events (the aggregation store)."""
    def dispatch(self, event: AggregationEvent) -> None: ...
