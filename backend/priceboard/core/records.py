"""Catalog Records — immutable domain values received from the card catalog.

Invariants:
    - Records are frozen once constructed (never mutated after receipt)
    - CardRecord.price is None when the catalog has no market price
    - A present price is a finite decimal string ("0" is present, not absent)
    - CardPage.next_url is set whenever has_more is True

Design Decisions:
    - Frozen dataclasses, not Pydantic: core stays free of boundary validation;
      schemas/catalog.py validates wire payloads and converts into these
    - Decimal over float for prices: "0.10" and "0.1" compare equal, no rounding drift
"""

from dataclasses import dataclass, field
from decimal import Decimal

from priceboard.core.domain_types import RequestUrl, SetCode


@dataclass(frozen=True)
class SourceSet:
    """Display metadata for one catalog set. Loaded once by SetCatalog."""
    code: SetCode
    name: str
    icon_svg_uri: str
    digital: bool = False
    set_type: str = ""


@dataclass(frozen=True)
class CardRecord:
    """One priced observation of a card within a set."""
    id: str
    set_code: SetCode
    name: str
    image_uris: dict[str, str] = field(default_factory=dict, hash=False)
    price: str | None = None

    @property
    def has_price(self) -> bool:
        return self.price is not None

    @property
    def price_value(self) -> Decimal | None:
        """Numeric price, or None when absent."""
        if self.price is None:
            return None
        return Decimal(self.price)

    @property
    def image_url(self) -> str | None:
        """Preferred display image (normal, then large, then small)."""
        for size in ("normal", "large", "small"):
            if size in self.image_uris:
                return self.image_uris[size]
        return None


@dataclass(frozen=True)
class CardPage:
    """One decoded page of a paginated card search."""
    records: tuple[CardRecord, ...]
    has_more: bool
    next_url: RequestUrl | None = None
