"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from geocoin.core.models import Cell, Coin


# --- Shared ---

class CellSchema(BaseModel):
    i: int
    j: int

    @classmethod
    def from_cell(cls, cell: Cell) -> CellSchema:
        return cls(i=cell.i, j=cell.j)

    def to_cell(self) -> Cell:
        return Cell(self.i, self.j)


class CoinSchema(BaseModel):
    i: int = Field(description="Origin cell latitude index")
    j: int = Field(description="Origin cell longitude index")
    index: int = Field(ge=0, description="Mint sequence number within the origin cell")

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinSchema:
        return cls(i=coin.origin.i, j=coin.origin.j, index=coin.index)

    def to_coin(self) -> Coin:
        return Coin(Cell(self.i, self.j), self.index)


# --- State ---

class CacheSchema(BaseModel):
    key: str
    cell: CellSchema
    bounds: list[list[float]] = Field(description="[[south, west], [north, east]]")
    coins: list[CoinSchema]


class PlayerSchema(BaseModel):
    lat: float
    lng: float
    cell: CellSchema


class WorldStateResponse(BaseModel):
    player: PlayerSchema
    score: int
    status: str
    inventory: list[CoinSchema] = Field(default_factory=list)
    caches: list[CacheSchema] = Field(default_factory=list)
    sensor_running: bool = False


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cell: CellSchema | None = None


# --- Player ---

class MoveRequest(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class MoveResponse(BaseModel):
    player: PlayerSchema
    shown: list[CellSchema] = Field(default_factory=list)
    hidden: list[CellSchema] = Field(default_factory=list)


# --- Coins ---

class TransferRequest(BaseModel):
    cell: CellSchema
    coin: CoinSchema | None = Field(None, description="Omit to move the most recent coin")


class TransferResponse(BaseModel):
    coin: CoinSchema
    score: int
    status: str
    cache_coins: int


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str


# --- Config ---

class WorldConfigResponse(BaseModel):
    world_seed: int
    cell_size: float
    coin_rate_mod: int
    spawn_probability: float
    neighborhood_size: int
    start_lat: float
    start_lng: float
    sensor_poll_seconds: float
