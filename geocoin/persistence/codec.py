"""Text encoding of the two persisted blobs: ``cacheData`` and ``inventory``.

Wire shapes::

    cacheData: [["i,j", [{"i": 0, "j": 0, "index": 3}, ...]], ...]
    inventory: [{"i": 0, "j": 0, "index": 3}, ...]
"""

from __future__ import annotations

import json
from typing import Iterable

from pydantic import BaseModel, ConfigDict, StrictInt, TypeAdapter, ValidationError

from geocoin.core.errors import MalformedPersistedStateError
from geocoin.core.models import Cell, Coin, cell_key, parse_cell_key

CACHE_DATA_KEY = "cacheData"
INVENTORY_KEY = "inventory"


class CoinRecord(BaseModel):
    """Persisted coin identity (origin cell flattened onto the coin)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    i: StrictInt
    j: StrictInt
    index: StrictInt

    @classmethod
    def from_coin(cls, coin: Coin) -> CoinRecord:
        return cls(i=coin.origin.i, j=coin.origin.j, index=coin.index)

    def to_coin(self) -> Coin:
        return Coin(Cell(self.i, self.j), self.index)


_CACHE_DATA = TypeAdapter(list[tuple[str, list[CoinRecord]]])
_INVENTORY = TypeAdapter(list[CoinRecord])


def _load_json(key: str, text: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedPersistedStateError(key, f"invalid JSON ({exc.msg})") from exc


def _check_unique(key: str, coins: Iterable[Coin], seen: set[Coin]) -> None:
    for coin in coins:
        if coin in seen:
            raise MalformedPersistedStateError(key, f"coin {coin!r} appears more than once")
        seen.add(coin)


# -- cacheData --

def encode_cache_data(contents: Iterable[tuple[Cell, list[Coin]]]) -> str:
    payload = [
        [cell_key(cell), [CoinRecord.from_coin(c).model_dump() for c in coins]]
        for cell, coins in contents
    ]
    return json.dumps(payload, separators=(",", ":"))


def decode_cache_data(text: str) -> list[tuple[Cell, list[Coin]]]:
    """Parse ``cacheData``. Raises MalformedPersistedStateError on any defect."""
    raw = _load_json(CACHE_DATA_KEY, text)
    try:
        pairs = _CACHE_DATA.validate_python(raw)
    except ValidationError as exc:
        raise MalformedPersistedStateError(CACHE_DATA_KEY, f"{exc.error_count()} shape error(s)") from exc

    result: list[tuple[Cell, list[Coin]]] = []
    cells: set[Cell] = set()
    seen: set[Coin] = set()
    for key, records in pairs:
        try:
            cell = parse_cell_key(key)
        except ValueError as exc:
            raise MalformedPersistedStateError(CACHE_DATA_KEY, str(exc)) from exc
        if cell in cells:
            raise MalformedPersistedStateError(CACHE_DATA_KEY, f"cell {key!r} listed twice")
        cells.add(cell)
        coins = [r.to_coin() for r in records]
        _check_unique(CACHE_DATA_KEY, coins, seen)
        result.append((cell, coins))
    return result


# -- inventory --

def encode_inventory(coins: Iterable[Coin]) -> str:
    payload = [CoinRecord.from_coin(c).model_dump() for c in coins]
    return json.dumps(payload, separators=(",", ":"))


def decode_inventory(text: str) -> list[Coin]:
    """Parse ``inventory``. Raises MalformedPersistedStateError on any defect."""
    raw = _load_json(INVENTORY_KEY, text)
    try:
        records = _INVENTORY.validate_python(raw)
    except ValidationError as exc:
        raise MalformedPersistedStateError(INVENTORY_KEY, f"{exc.error_count()} shape error(s)") from exc
    coins = [r.to_coin() for r in records]
    _check_unique(INVENTORY_KEY, coins, set())
    return coins
