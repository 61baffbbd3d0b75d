"""Service test fixtures — fake-backed PriceBoard + FastAPI test client.

Invariants:
    - Every test gets a fresh PriceBoard over a FakeCatalogClient
    - get_board dependency overridden; the real HTTP client is never built

Design Decisions:
    - ASGITransport does not run the lifespan: no logging setup, no close_board
"""

import pytest
from httpx import ASGITransport, AsyncClient

from priceboard.api.dependencies import get_board
from priceboard.main import app
from priceboard.services.price_board import PriceBoard

from tests.services.fake_catalog import BASE_URL, FakeCatalogClient, source_set


@pytest.fixture
def fake_client():
    return FakeCatalogClient(sets=[
        source_set("neo"), source_set("dmu"), source_set("tneo", "token"),
    ])


@pytest.fixture
async def board(fake_client):
    board = PriceBoard(fake_client, BASE_URL)
    yield board
    await board.close()


@pytest.fixture
async def client(board):
    """FastAPI test client with the board dependency overridden."""
    app.dependency_overrides[get_board] = lambda: board
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
