"""Catalog Schemas — tests for wire payload validation and domain conversion.

Tests cover:
    - Card page decoding (has_more / next_page pairing)
    - Price validation: null ok, "0" ok, non-numeric rejected
    - Missing image_uris / prices tolerated (double-faced cards, unpriced cards)
    - Set payload conversion normalizes codes
"""

import pytest
from pydantic import ValidationError

from priceboard.schemas.catalog import (
    CardPagePayload,
    CardPayload,
    SetListPayload,
)


def _card_json(**overrides) -> dict:
    data = {
        "object": "card",
        "id": "0000-1111",
        "set": "neo",
        "name": "The Wandering Emperor",
        "image_uris": {"small": "https://img/s.jpg", "normal": "https://img/n.jpg"},
        "prices": {"usd": "20.00", "eur": "18.50", "tix": "3.1"},
    }
    data.update(overrides)
    return data


def test_card_converts_to_domain():
    record = CardPayload.model_validate(_card_json()).to_domain()
    assert record.id == "0000-1111"
    assert record.set_code == "neo"
    assert record.price == "18.50"
    assert record.image_url == "https://img/n.jpg"


def test_card_null_price_is_absent():
    record = CardPayload.model_validate(
        _card_json(prices={"eur": None}),
    ).to_domain()
    assert record.price is None


def test_card_without_prices_object():
    payload = _card_json()
    del payload["prices"]
    assert CardPayload.model_validate(payload).to_domain().price is None


def test_card_zero_price_kept_as_string():
    record = CardPayload.model_validate(_card_json(prices={"eur": "0"})).to_domain()
    assert record.price == "0"


@pytest.mark.parametrize("bad", ["free", "NaN", "Infinity", ""])
def test_card_rejects_non_numeric_price(bad):
    with pytest.raises(ValidationError):
        CardPayload.model_validate(_card_json(prices={"eur": bad}))


def test_card_without_image_uris():
    payload = _card_json()
    del payload["image_uris"]
    record = CardPayload.model_validate(payload).to_domain()
    assert record.image_uris == {}
    assert record.image_url is None


def test_card_requires_id():
    payload = _card_json()
    del payload["id"]
    with pytest.raises(ValidationError):
        CardPayload.model_validate(payload)


def test_page_with_continuation():
    page = CardPagePayload.model_validate({
        "object": "list",
        "total_cards": 351,
        "has_more": True,
        "next_page": "https://api/cards/search?page=2",
        "data": [_card_json()],
    }).to_domain()
    assert page.has_more is True
    assert page.next_url == "https://api/cards/search?page=2"
    assert len(page.records) == 1


def test_last_page_has_no_next_url():
    page = CardPagePayload.model_validate({
        "has_more": False, "data": [],
    }).to_domain()
    assert page.has_more is False
    assert page.next_url is None
    assert page.records == ()


def test_page_rejects_has_more_without_next_page():
    with pytest.raises(ValidationError):
        CardPagePayload.model_validate({"has_more": True, "data": []})


def test_page_requires_data():
    with pytest.raises(ValidationError):
        CardPagePayload.model_validate({"has_more": False})


def test_set_list_converts_to_domain():
    payload = SetListPayload.model_validate({"data": [{
        "code": "NEO",
        "name": "Kamigawa: Neon Dynasty",
        "icon_svg_uri": "https://svg/neo.svg",
        "digital": False,
        "set_type": "expansion",
        "card_count": 512,
    }]})
    source_set = payload.data[0].to_domain()
    assert source_set.code == "neo"
    assert source_set.set_type == "expansion"
