"""Sets — listable source sets from the card catalog.

Invariants:
    - Catalog failures surface as CatalogError envelopes (502/503), never 500
    - Unknown set codes return 404
"""

from fastapi import APIRouter, Depends

from priceboard.api.dependencies import get_board
from priceboard.core.errors import ResourceNotFoundError
from priceboard.schemas.board import SourceSetResponse
from priceboard.services.price_board import PriceBoard

router = APIRouter(prefix="/api/v1/sets", tags=["sets"])


@router.get("", response_model=list[SourceSetResponse])
async def list_sets(board: PriceBoard = Depends(get_board)):
    sets = await board.catalog.load()
    return [SourceSetResponse.from_domain(s) for s in sets]


@router.get("/{set_code}", response_model=SourceSetResponse)
async def get_set(set_code: str, board: PriceBoard = Depends(get_board)):
    source_set = await board.catalog.get(set_code)
    if source_set is None:
        raise ResourceNotFoundError("Set", set_code)
    return SourceSetResponse.from_domain(source_set)
