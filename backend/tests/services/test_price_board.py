"""Price Board — tests for the selection → orchestrator → store wiring.

Tests cover:
    - fetch_selected reads the selection at call time
    - state reflects the store after chains finish
    - close() shuts down chains and closes the client
"""

from priceboard.config import Settings
from priceboard.infrastructure.catalog_client import CatalogHttpClient
from priceboard.services.price_board import PriceBoard

from tests.services.fake_catalog import card, page, search_url


async def test_fetch_selected_uses_selection_snapshot(board, fake_client):
    fake_client.pages[search_url("neo")] = page(card("n1", "3.00", "neo"))
    board.selection.toggle("neo")

    generation = board.fetch_selected()
    board.selection.toggle("dmu")   # after initiate: no effect on this fetch
    await board.orchestrator.drain()

    assert generation == 1
    assert fake_client.calls == [search_url("neo")]
    assert [c.id for c in board.state.visible_cards] == ["n1"]


async def test_refetch_replaces_previous_results(board, fake_client):
    fake_client.pages[search_url("neo")] = page(card("n1", "3.00", "neo"))
    fake_client.pages[search_url("dmu")] = page(card("d1", "1.00", "dmu"))

    board.selection.toggle("neo")
    board.fetch_selected()
    await board.orchestrator.drain()

    board.selection.clear()
    board.selection.toggle("dmu")
    board.fetch_selected()
    await board.orchestrator.drain()

    assert [c.id for c in board.state.cards] == ["d1"]
    assert board.state.generation == 2


async def test_close_closes_client(board, fake_client):
    await board.close()
    assert fake_client.closed


async def test_from_settings_builds_http_client():
    settings = Settings(
        catalog_base_url="https://catalog.example/",
        catalog_timeout_seconds=5.0,
        min_price_eur="0.50",
        excluded_set_types=["token"],
    )
    board = PriceBoard.from_settings(settings)
    try:
        assert isinstance(board.client, CatalogHttpClient)
        assert board.orchestrator.base_url == "https://catalog.example"
        assert board.orchestrator.min_price_eur == "0.50"
        assert board.catalog.excluded_types == {"token"}
    finally:
        await board.close()
