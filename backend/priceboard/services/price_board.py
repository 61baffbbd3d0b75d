"""Price Board — wires selection, orchestrator and store into one controller.

Invariants:
    - fetch_selected() reads the selection at call time (later toggles do not
      affect chains already started)
    - All state reads go through store.state; nothing else holds AggregateState

Design Decisions:
    - Facade owned by the API layer as a process singleton: single-process
      uvicorn, state lost on restart (no persistence)
    - from_settings() builds the real HTTP client; tests pass a fake client
"""

import logging

from priceboard.config import Settings
from priceboard.core.aggregate_state import AggregateState
from priceboard.core.catalog_protocols import CatalogClient
from priceboard.core.catalog_queries import DEFAULT_MIN_PRICE_EUR
from priceboard.core.domain_types import Generation
from priceboard.core.selection import SelectionStore
from priceboard.infrastructure.catalog_client import CatalogHttpClient
from priceboard.services.aggregation_store import AggregationStore
from priceboard.services.fetch_orchestrator import FetchOrchestrator
from priceboard.services.set_catalog import SetCatalog

logger = logging.getLogger(__name__)


class PriceBoard:
    """Controller for one user's selection and aggregated prices."""

    def __init__(
        self,
        client: CatalogClient,
        base_url: str,
        min_price_eur: str = DEFAULT_MIN_PRICE_EUR,
        excluded_set_types: list[str] | None = None,
    ):
        self.client = client
        self.selection = SelectionStore()
        self.store = AggregationStore()
        self.orchestrator = FetchOrchestrator(
            client, self.store, base_url, min_price_eur,
        )
        if excluded_set_types is None:
            self.catalog = SetCatalog(client)
        else:
            self.catalog = SetCatalog(client, excluded_set_types)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PriceBoard":
        client = CatalogHttpClient(
            settings.catalog_base_url,
            timeout_seconds=settings.catalog_timeout_seconds,
            user_agent=settings.catalog_user_agent,
        )
        return cls(
            client,
            settings.catalog_base_url,
            min_price_eur=settings.min_price_eur,
            excluded_set_types=settings.excluded_set_types,
        )

    @property
    def state(self) -> AggregateState:
        return self.store.state

    def fetch_selected(self) -> Generation:
        """Start aggregation for the current selection."""
        codes = self.selection.snapshot()
        logger.info(f"Fetching prices for {len(codes)} selected set(s)")
        return self.orchestrator.initiate(codes)

    async def close(self) -> None:
        await self.orchestrator.shutdown()
        aclose = getattr(self.client, "aclose", None)
        if aclose is not None:
            await aclose()
