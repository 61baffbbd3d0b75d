"""Catalog Schemas — Pydantic models for card catalog JSON payloads.

Invariants:
    - Unknown fields are ignored (the catalog adds fields over time)
    - prices.eur is either null/absent or a finite decimal string
    - has_more=True requires next_page (a chain cannot continue without it)
    - to_domain() is the only path from wire payload to core records

Design Decisions:
    - Validation here, not in the reducer: a malformed page becomes one
      DecodeError for that chain instead of a crash inside the state machine
"""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, Field, field_validator, model_validator

from priceboard.core.domain_types import RequestUrl, normalize_set_code
from priceboard.core.records import CardPage, CardRecord, SourceSet


class SetPayload(BaseModel):
    code: str = Field(min_length=1)
    name: str
    icon_svg_uri: str = ""
    digital: bool = False
    set_type: str = ""

    def to_domain(self) -> SourceSet:
        return SourceSet(
            code=normalize_set_code(self.code),
            name=self.name,
            icon_svg_uri=self.icon_svg_uri,
            digital=self.digital,
            set_type=self.set_type,
        )


class SetListPayload(BaseModel):
    data: list[SetPayload]


class PricesPayload(BaseModel):
    eur: str | None = None

    @field_validator("eur")
    @classmethod
    def check_decimal(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            value = Decimal(v)
        except InvalidOperation:
            raise ValueError(f"price is not a number: {v!r}")
        if not value.is_finite():
            raise ValueError(f"price is not finite: {v!r}")
        return v


class CardPayload(BaseModel):
    id: str
    set: str
    name: str
    image_uris: dict[str, str] = Field(default_factory=dict)
    prices: PricesPayload = Field(default_factory=PricesPayload)

    def to_domain(self) -> CardRecord:
        return CardRecord(
            id=self.id,
            set_code=normalize_set_code(self.set),
            name=self.name,
            image_uris=dict(self.image_uris),
            price=self.prices.eur,
        )


class CardPagePayload(BaseModel):
    data: list[CardPayload]
    has_more: bool = False
    next_page: str | None = None

    @model_validator(mode="after")
    def require_next_page(self) -> "CardPagePayload":
        if self.has_more and not self.next_page:
            raise ValueError("has_more is true but next_page is missing")
        return self

    def to_domain(self) -> CardPage:
        return CardPage(
            records=tuple(card.to_domain() for card in self.data),
            has_more=self.has_more,
            next_url=RequestUrl(self.next_page) if self.next_page else None,
        )
