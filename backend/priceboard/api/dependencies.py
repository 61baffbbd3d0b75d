"""Shared Dependencies — the process-wide PriceBoard instance.

Invariants:
    - Exactly one PriceBoard per process, created lazily from settings
    - close_board() releases the HTTP client and cancels running chains

Design Decisions:
    - Module-level singleton: single-process uvicorn, in-memory state only
    - Exposed as a FastAPI dependency so tests override it with a fake-backed board
"""

from priceboard.config import get_settings
from priceboard.services.price_board import PriceBoard

_board: PriceBoard | None = None


def get_board() -> PriceBoard:
    global _board
    if _board is None:
        _board = PriceBoard.from_settings(get_settings())
    return _board


async def close_board() -> None:
    global _board
    if _board is not None:
        await _board.close()
        _board = None
