"""Set Catalog — loads listable set descriptors once and serves lookups.

Invariants:
    - The catalog /sets endpoint is called at most once per successful load
    - A failed load is not cached; the next call tries again
    - Excluded set types never appear in sets() or get()

Design Decisions:
    - asyncio.Lock around the first load: concurrent callers share one request
"""

import asyncio
import logging
from collections.abc import Iterable

from priceboard.core.catalog_protocols import CatalogClient
from priceboard.core.catalog_queries import EXCLUDED_SET_TYPES, filter_listable_sets
from priceboard.core.domain_types import SetCode, normalize_set_code
from priceboard.core.records import SourceSet

logger = logging.getLogger(__name__)


class SetCatalog:
    """Cached view of the sets a user may select."""

    def __init__(
        self,
        client: CatalogClient,
        excluded_types: Iterable[str] = EXCLUDED_SET_TYPES,
    ):
        self.client = client
        self.excluded_types = frozenset(excluded_types)
        self._sets: dict[SetCode, SourceSet] | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._sets is not None

    async def load(self) -> list[SourceSet]:
        """Return listable sets, fetching them on first use."""
        return list((await self._index()).values())

    async def get(self, code: str) -> SourceSet | None:
        return (await self._index()).get(normalize_set_code(code))

    async def _index(self) -> dict[SetCode, SourceSet]:
        sets = self._sets
        if sets is not None:
            return sets
        async with self._lock:
            if self._sets is None:
                raw = await self.client.list_sets()
                listable = filter_listable_sets(raw, self.excluded_types)
                self._sets = {s.code: s for s in listable}
                logger.info(
                    f"Loaded {len(listable)} listable set(s) "
                    f"({len(raw) - len(listable)} excluded)",
                )
            return self._sets
