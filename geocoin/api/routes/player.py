"""POST /api/v1/player/* — explicit moves and directional nudges."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.routes.state import serialize_player
from geocoin.api.schemas import CellSchema, MoveRequest, MoveResponse
from geocoin.core.enums import Direction, ViewEventKind
from geocoin.core.viewport import ViewEvent
from geocoin.engine.session import GameSession

router = APIRouter()


class NudgeDirection(str, Enum):
    north = "north"
    east = "east"
    south = "south"
    west = "west"


def _move_response(session: GameSession, events: list[ViewEvent]) -> MoveResponse:
    return MoveResponse(
        player=serialize_player(session),
        shown=[CellSchema.from_cell(e.cell) for e in events if e.kind == ViewEventKind.SHOW],
        hidden=[CellSchema.from_cell(e.cell) for e in events if e.kind == ViewEventKind.HIDE],
    )


@router.post("/player/move", response_model=MoveResponse)
def move(body: MoveRequest, session: GameSession = Depends(get_session)) -> MoveResponse:
    events = session.move_to(body.lat, body.lng)
    return _move_response(session, events)


@router.post("/player/nudge/{direction}", response_model=MoveResponse)
def nudge(direction: NudgeDirection, session: GameSession = Depends(get_session)) -> MoveResponse:
    events = session.nudge(Direction[direction.name.upper()])
    return _move_response(session, events)
