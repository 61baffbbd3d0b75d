"""Aggregate State — the combined result of every pagination chain of one generation.

Invariants:
    - pending_requests non-empty ⇒ is_loading; visible_cards is empty while loading
    - Every record in cards has a present price
    - cards is sorted by non-increasing price
    - failures never removes records; a failed set keeps what it already merged

Design Decisions:
    - Frozen dataclass with tuple/frozenset fields: the reducer returns a new value
      per transition, so callers holding an old snapshot never see it change
    - Failure markers as a tuple (not a dict keyed by set): one set may fail on
      a later page after earlier pages succeeded, each failure is reported
"""

from dataclasses import dataclass, field

from priceboard.core.domain_types import FailureKind, Generation, RequestUrl, SetCode
from priceboard.core.records import CardRecord


@dataclass(frozen=True)
class FailureMarker:
    """Per-source failure record produced by a FetchFailed event."""
    set_code: SetCode
    url: RequestUrl
    kind: FailureKind
    reason: str

    def to_dict(self) -> dict:
        return {
            "set_code": self.set_code,
            "url": self.url,
            "kind": self.kind.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class AggregateState:
    """Reducer output — pure value, no IO."""

    cards: tuple[CardRecord, ...] = ()
    pending_requests: frozenset[RequestUrl] = field(default_factory=frozenset)
    failures: tuple[FailureMarker, ...] = ()
    generation: Generation = Generation(0)

    # --- Computed properties ---------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return len(self.pending_requests) > 0

    @property
    def visible_cards(self) -> tuple[CardRecord, ...]:
        """Cards safe to show as final (none while any request is pending)."""
        if self.is_loading:
            return ()
        return self.cards

    @property
    def failed_sets(self) -> list[SetCode]:
        return sorted({f.set_code for f in self.failures})

    def to_dict(self) -> dict:
        """JSON-ready view for API and SSE payloads."""
        return {
            "generation": self.generation,
            "loading": self.is_loading,
            "pending_requests": sorted(self.pending_requests),
            "card_count": len(self.cards),
            "cards": [_card_to_dict(c) for c in self.visible_cards],
            "failed_sets": self.failed_sets,
            "failures": [f.to_dict() for f in self.failures],
        }


def _card_to_dict(card: CardRecord) -> dict:
    return {
        "id": card.id,
        "set": card.set_code,
        "name": card.name,
        "image_url": card.image_url,
        "price_eur": card.price,
    }
