"""POST /api/v1/coins/{take,give} — the popup buttons."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import CoinSchema, TransferRequest, TransferResponse
from geocoin.core.errors import NotFoundError
from geocoin.engine.session import GameSession

router = APIRouter()


def _response(session: GameSession, body: TransferRequest, coin) -> TransferResponse:
    contents = session.cache_contents(body.cell.to_cell()) or ()
    return TransferResponse(
        coin=CoinSchema.from_coin(coin),
        score=len(session.inventory()),
        status=session.status_text(),
        cache_coins=len(contents),
    )


@router.post("/coins/take", response_model=TransferResponse)
def take(body: TransferRequest, session: GameSession = Depends(get_session)) -> TransferResponse:
    cell = body.cell.to_cell()
    try:
        if body.coin is None:
            coin = session.take_any(cell)
        else:
            coin = body.coin.to_coin()
            session.take(coin, cell)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _response(session, body, coin)


@router.post("/coins/give", response_model=TransferResponse)
def give(body: TransferRequest, session: GameSession = Depends(get_session)) -> TransferResponse:
    cell = body.cell.to_cell()
    try:
        if body.coin is None:
            coin = session.give_any(cell)
        else:
            coin = body.coin.to_coin()
            session.give(coin, cell)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _response(session, body, coin)
