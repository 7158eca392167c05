"""Coin ownership ledger: the only legal way to move a coin."""

from __future__ import annotations

import logging
from typing import Iterable

from geocoin.core.cache_world import CacheWorld
from geocoin.core.errors import NotFoundError
from geocoin.core.models import Cell, Coin

logger = logging.getLogger(__name__)


class CoinLedger:
    """Player inventory plus transfers between it and cache contents.

    Every coin lives in exactly one place: the inventory or one cache.
    ``take`` and ``give`` check membership before touching either
    collection, so a failed call leaves both untouched and a successful
    one never exposes a coin held twice or not at all.
    """

    __slots__ = ("_caches", "_inventory")

    def __init__(self, caches: CacheWorld) -> None:
        self._caches = caches
        self._inventory: list[Coin] = []

    @property
    def inventory(self) -> tuple[Coin, ...]:
        """Read-only view in collection order (oldest first)."""
        return tuple(self._inventory)

    def total_inventory(self) -> int:
        return len(self._inventory)

    def holds(self, coin: Coin) -> bool:
        return coin in self._inventory

    # -- transfers --

    def take(self, coin: Coin, from_cell: Cell) -> None:
        """Move *coin* from the cache at *from_cell* into the inventory."""
        coins = self._cache_at(from_cell, coin)
        if coin not in coins:
            raise NotFoundError(coin, f"cache {from_cell}")
        coins.remove(coin)
        self._inventory.append(coin)
        logger.debug("Took %r from %s", coin, from_cell)

    def give(self, coin: Coin, to_cell: Cell) -> None:
        """Move *coin* from the inventory into the cache at *to_cell*."""
        if coin not in self._inventory:
            raise NotFoundError(coin, "inventory")
        coins = self._cache_at(to_cell, coin)
        self._inventory.remove(coin)
        coins.append(coin)
        logger.debug("Gave %r to %s", coin, to_cell)

    def take_any(self, from_cell: Cell) -> Coin:
        """Take the cache's most recently added coin."""
        coins = self._cache_at(from_cell)
        if not coins:
            raise NotFoundError(None, f"cache {from_cell}")
        coin = coins[-1]
        self.take(coin, from_cell)
        return coin

    def give_any(self, to_cell: Cell) -> Coin:
        """Deposit the most recently collected inventory coin."""
        if not self._inventory:
            raise NotFoundError(None, "inventory")
        coin = self._inventory[-1]
        self.give(coin, to_cell)
        return coin

    def _cache_at(self, cell: Cell, coin: Coin | None = None) -> list[Coin]:
        # Only cache sites hold coins; other cells are never materialized
        if not self._caches.should_spawn(cell):
            raise NotFoundError(coin, f"non-cache cell {cell}")
        return self._caches.get_or_create(cell)

    # -- lifecycle --

    def restore(self, coins: Iterable[Coin]) -> None:
        self._inventory = list(coins)

    def reset(self) -> None:
        self._inventory.clear()
