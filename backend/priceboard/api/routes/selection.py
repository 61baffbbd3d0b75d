"""Selection — toggle and clear the set codes to aggregate.

Invariants:
    - Toggling does not start or stop any fetch; POST /cards/fetch does that
"""

from fastapi import APIRouter, Depends

from priceboard.api.dependencies import get_board
from priceboard.schemas.board import SelectionResponse, SelectionToggle
from priceboard.services.price_board import PriceBoard

router = APIRouter(prefix="/api/v1/selection", tags=["selection"])


def _selection_response(board: PriceBoard) -> SelectionResponse:
    codes = list(board.selection.snapshot())
    return SelectionResponse(set_codes=codes, count=len(codes))


@router.get("", response_model=SelectionResponse)
async def get_selection(board: PriceBoard = Depends(get_board)):
    return _selection_response(board)


@router.post("/toggle", response_model=SelectionResponse)
async def toggle_set(body: SelectionToggle, board: PriceBoard = Depends(get_board)):
    board.selection.toggle(body.set_code)
    return _selection_response(board)


@router.delete("", response_model=SelectionResponse)
async def clear_selection(board: PriceBoard = Depends(get_board)):
    board.selection.clear()
    return _selection_response(board)
