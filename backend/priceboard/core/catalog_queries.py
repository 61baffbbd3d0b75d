"""Catalog Queries — search URL construction and set listing rules.

Invariants:
    - Initial search per set: "s:<code> eur>=<min_price> unique:prints"
    - Continuation pages never go through here (next_page is used verbatim)
    - Listing excludes set types that never carry market prices

Design Decisions:
    - Query string built with urlencode: the URL doubles as the pending-request
      identifier, so it must be byte-identical every time it is built
"""

from collections.abc import Iterable
from urllib.parse import urlencode

from priceboard.core.domain_types import RequestUrl, SetCode
from priceboard.core.records import SourceSet


DEFAULT_MIN_PRICE_EUR: str = "0.01"
EXCLUDED_SET_TYPES: frozenset[str] = frozenset({"alchemy", "token", "memorabilia"})


def build_search_query(set_code: SetCode, min_price_eur: str = DEFAULT_MIN_PRICE_EUR) -> str:
    """Set filter + non-zero price predicate + unique prints modifier."""
    return f"s:{set_code} eur>={min_price_eur} unique:prints"


def build_search_url(
    base_url: str, set_code: SetCode, min_price_eur: str = DEFAULT_MIN_PRICE_EUR,
) -> RequestUrl:
    """First-page URL for one set's pagination chain."""
    query = urlencode({"q": build_search_query(set_code, min_price_eur)})
    return RequestUrl(f"{base_url.rstrip('/')}/cards/search?{query}")


def filter_listable_sets(
    sets: Iterable[SourceSet],
    excluded_types: Iterable[str] = EXCLUDED_SET_TYPES,
) -> list[SourceSet]:
    """Drop set types that are not worth offering for selection."""
    excluded = frozenset(excluded_types)
    return [s for s in sets if s.set_type not in excluded]
