"""Cards — start aggregation, read the combined state, stream its progress.

Invariants:
    - POST /fetch returns 202 immediately; chains run in the background
    - GET returns the derived view: cards hidden while any request is pending
    - SSE stream emits one "state" event per change and a final "done" event
      once loading clears (immediately if nothing is loading)

Design Decisions:
    - StreamingResponse for SSE: event_generator yields formatted SSE lines
    - The stream ends on the first idle state: a later fetch opens a new stream
"""

import asyncio
import json
import logging
from contextlib import aclosing

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from priceboard.api.dependencies import get_board
from priceboard.schemas.board import FetchStartedResponse
from priceboard.services.price_board import PriceBoard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cards", tags=["cards"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post(
    "/fetch", response_model=FetchStartedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def fetch_cards(board: PriceBoard = Depends(get_board)):
    """Reset the aggregate and start one pagination chain per selected set."""
    set_codes = list(board.selection.snapshot())
    generation = board.fetch_selected()
    return FetchStartedResponse(generation=generation, set_codes=set_codes)


@router.get("")
async def get_cards(board: PriceBoard = Depends(get_board)):
    return board.state.to_dict()


@router.get("/stream")
async def stream_cards(board: PriceBoard = Depends(get_board)):
    """SSE stream of aggregate state until loading clears."""

    async def event_generator():
        try:
            async with aclosing(board.store.subscribe()) as states:
                async for state in states:
                    yield _sse_line({"type": "state", "data": state.to_dict()})
                    if not state.is_loading:
                        yield _sse_line(_done_event(state.failed_sets))
                        return
        except asyncio.CancelledError:
            logger.info("Client disconnected from cards stream")
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


def _done_event(failed_sets: list[str]) -> dict:
    return {
        "type": "done",
        "data": {"error": bool(failed_sets), "failed_sets": failed_sets},
    }


def _sse_line(event: dict) -> str:
    """Format event as SSE data line."""
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"
