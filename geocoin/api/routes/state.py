"""GET /api/v1/state, /caches and /events — world data polled by the UI."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import (
    CacheSchema,
    CellSchema,
    CoinSchema,
    EventSchema,
    PlayerSchema,
    WorldStateResponse,
)
from geocoin.core.models import Cell, Coin, cell_key
from geocoin.engine.session import GameSession

router = APIRouter()


def serialize_player(session: GameSession) -> PlayerSchema:
    world = session.world
    return PlayerSchema(lat=world.lat, lng=world.lng, cell=CellSchema.from_cell(world.player_cell))


def serialize_cache(session: GameSession, cell: Cell, coins: tuple[Coin, ...]) -> CacheSchema:
    (south, west), (north, east) = session.world.grid.cell_bounds(cell)
    return CacheSchema(
        key=cell_key(cell),
        cell=CellSchema.from_cell(cell),
        bounds=[[south, west], [north, east]],
        coins=[CoinSchema.from_coin(c) for c in coins],
    )


@router.get("/state", response_model=WorldStateResponse)
def get_state(session: GameSession = Depends(get_session)) -> WorldStateResponse:
    caches = [serialize_cache(session, cell, coins) for cell, coins in session.shown_caches()]
    inventory = [CoinSchema.from_coin(c) for c in session.inventory()]
    return WorldStateResponse(
        player=serialize_player(session),
        score=len(inventory),
        status=session.status_text(),
        inventory=inventory,
        caches=caches,
        sensor_running=session.sensor_running,
    )


@router.get("/caches/{i}/{j}", response_model=CacheSchema)
def get_cache(i: int, j: int, session: GameSession = Depends(get_session)) -> CacheSchema:
    cell = Cell(i, j)
    coins = session.cache_contents(cell)
    if coins is None:
        raise HTTPException(status_code=404, detail=f"No cache at cell {cell_key(cell)}.")
    return serialize_cache(session, cell, coins)


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since: int = Query(0, ge=0, description="Only return events after this sequence number"),
    session: GameSession = Depends(get_session),
) -> list[EventSchema]:
    return [
        EventSchema(
            seq=ev.seq,
            category=ev.category,
            message=ev.message,
            cell=CellSchema.from_cell(ev.cell) if ev.cell is not None else None,
        )
        for ev in session.event_log.since(since)
    ]
