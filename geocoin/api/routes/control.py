"""POST /api/v1/control/* — reset and the sensor-follow toggle."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import ControlResponse, MoveRequest
from geocoin.engine.session import GameSession

router = APIRouter()


class SensorAction(str, Enum):
    start = "start"
    stop = "stop"


@router.post("/control/reset", response_model=ControlResponse)
def reset(
    confirm: bool = Query(False, description="Must be true; resetting erases all coins"),
    session: GameSession = Depends(get_session),
) -> ControlResponse:
    if not session.reset_all(confirm=confirm):
        raise HTTPException(status_code=400, detail="Reset requires confirm=true.")
    return ControlResponse(status="ok", message="World reset. " + session.status_text())


@router.post("/control/sensor/fix", response_model=ControlResponse)
def push_fix(body: MoveRequest, session: GameSession = Depends(get_session)) -> ControlResponse:
    session.device_fix.push(body.lat, body.lng)
    if not session.sensor_running:
        return ControlResponse(status="noop", message="Fix stored; sensor follow is off.")
    return ControlResponse(status="ok", message="Fix stored.")


@router.post("/control/sensor/{action}", response_model=ControlResponse)
def sensor(action: SensorAction, session: GameSession = Depends(get_session)) -> ControlResponse:
    match action:
        case SensorAction.start:
            if session.sensor_running:
                return ControlResponse(status="noop", message="Sensor follow already on.")
            session.start_sensor(session.device_fix)
            return ControlResponse(status="ok", message="Sensor follow started.")

        case SensorAction.stop:
            if not session.sensor_running:
                return ControlResponse(status="noop", message="Sensor follow already off.")
            session.stop_sensor()
            return ControlResponse(status="ok", message="Sensor follow stopped.")
