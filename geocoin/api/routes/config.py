"""GET /api/v1/config — expose world configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import WorldConfigResponse
from geocoin.engine.session import GameSession

router = APIRouter()


@router.get("/config", response_model=WorldConfigResponse)
def get_config(session: GameSession = Depends(get_session)) -> WorldConfigResponse:
    cfg = session.config
    return WorldConfigResponse(
        world_seed=cfg.world_seed,
        cell_size=cfg.cell_size,
        coin_rate_mod=cfg.coin_rate_mod,
        spawn_probability=cfg.spawn_probability,
        neighborhood_size=cfg.neighborhood_size,
        start_lat=cfg.start_lat,
        start_lng=cfg.start_lng,
        sensor_poll_seconds=cfg.sensor_poll_seconds,
    )
