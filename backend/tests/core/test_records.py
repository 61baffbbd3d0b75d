"""Catalog Records — tests for price and image helpers.

Tests cover:
    - price_value parses decimals and keeps None for absent prices
    - image_url prefers normal, falls back to large/small
"""

from decimal import Decimal

from priceboard.core.domain_types import SetCode
from priceboard.core.records import CardRecord


def _card(**kwargs) -> CardRecord:
    return CardRecord(id="c", set_code=SetCode("aaa"), name="c", **kwargs)


def test_price_value_parses_decimal():
    assert _card(price="1.50").price_value == Decimal("1.50")


def test_absent_price():
    card = _card()
    assert card.price_value is None
    assert not card.has_price


def test_zero_price_is_present():
    assert _card(price="0").has_price


def test_image_url_prefers_normal():
    card = _card(image_uris={"small": "s", "normal": "n", "large": "l"})
    assert card.image_url == "n"


def test_image_url_falls_back():
    assert _card(image_uris={"small": "s", "large": "l"}).image_url == "l"
    assert _card(image_uris={"small": "s"}).image_url == "s"
    assert _card().image_url is None


def test_records_are_hashable_despite_image_dict():
    assert hash(_card(image_uris={"normal": "n"})) == hash(_card(image_uris={}))
