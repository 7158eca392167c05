"""PersistenceGateway — saves and restores the world's coin ledger.

State is kept as two independent keyed text blobs, the way a browser's
local storage holds them. A missing key means "start empty"; a malformed
blob is discarded with a warning and never blocks startup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from geocoin.core.errors import MalformedPersistedStateError
from geocoin.persistence.codec import (
    CACHE_DATA_KEY,
    INVENTORY_KEY,
    decode_cache_data,
    decode_inventory,
    encode_cache_data,
    encode_inventory,
)

if TYPE_CHECKING:
    from geocoin.core.world_state import WorldState

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable string storage addressed by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process store; nothing survives the interpreter."""

    __slots__ = ("_data",)

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore:
    """One ``<key>.json`` file per key inside *directory*."""

    __slots__ = ("_dir",)

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class PersistenceGateway:
    """Serializes WorldState coin data to a KeyValueStore and back."""

    __slots__ = ("_store", "_saves")

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._saves = 0

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def save_count(self) -> int:
        return self._saves

    def save(self, world: WorldState) -> None:
        self._store.set(CACHE_DATA_KEY, encode_cache_data(world.caches.items()))
        self._store.set(INVENTORY_KEY, encode_inventory(world.ledger.inventory))
        self._saves += 1

    def load(self, world: WorldState) -> list[MalformedPersistedStateError]:
        """Restore persisted blobs into *world*.

        Returns the errors for blobs that were discarded (empty when
        everything loaded or nothing was stored).
        """
        discarded: list[MalformedPersistedStateError] = []

        cache_data = []
        text = self._store.get(CACHE_DATA_KEY)
        if text is not None:
            try:
                cache_data = decode_cache_data(text)
            except MalformedPersistedStateError as exc:
                discarded.append(self._discard(exc))

        inventory = []
        text = self._store.get(INVENTORY_KEY)
        if text is not None:
            try:
                inventory = decode_inventory(text)
                held = {coin for _, coins in cache_data for coin in coins}
                clash = next((coin for coin in inventory if coin in held), None)
                if clash is not None:
                    raise MalformedPersistedStateError(
                        INVENTORY_KEY, f"coin {clash!r} is also held by a cache"
                    )
            except MalformedPersistedStateError as exc:
                inventory = []
                discarded.append(self._discard(exc))

        for cell, coins in cache_data:
            world.caches.restore(cell, coins)
        world.ledger.restore(inventory)
        world.caches.reserve(inventory)

        logger.info(
            "Loaded %d cached cells and %d inventory coins",
            len(cache_data), len(inventory),
        )
        return discarded

    def clear(self) -> None:
        self._store.delete(CACHE_DATA_KEY)
        self._store.delete(INVENTORY_KEY)

    def _discard(self, exc: MalformedPersistedStateError) -> MalformedPersistedStateError:
        logger.warning("%s; discarding and starting empty", exc)
        self._store.delete(exc.key)
        return exc
