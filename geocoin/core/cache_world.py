"""Lazily materialized cache contents, keyed by cell."""

from __future__ import annotations

import logging
from typing import Iterable

from geocoin.core.models import Cell, Coin, cell_key
from geocoin.systems.rng import DeterministicRandom

logger = logging.getLogger(__name__)

COIN_RATE_MOD = 100
SPAWN_PROBABILITY = 0.1


class CacheWorld:
    """Owns the authoritative mapping from cell to its current coin list.

    A cell's list is generated exactly once, on first reference, and is
    returned by identity afterwards so that holders of the reference see
    every later transfer. Whether a cell is a cache site and how many coins
    it mints come from the same draw on the cell key.
    """

    __slots__ = ("_rng", "_coin_rate_mod", "_spawn_probability", "_contents", "_reserved")

    def __init__(
        self,
        rng: DeterministicRandom,
        coin_rate_mod: int = COIN_RATE_MOD,
        spawn_probability: float = SPAWN_PROBABILITY,
    ) -> None:
        self._rng = rng
        self._coin_rate_mod = coin_rate_mod
        self._spawn_probability = spawn_probability
        self._contents: dict[Cell, list[Coin]] = {}
        # Coins known to live outside any cache whose origin is not materialized yet
        self._reserved: set[Coin] = set()

    # -- generation --

    def should_spawn(self, cell: Cell) -> bool:
        return self._rng.chance(cell_key(cell), self._spawn_probability)

    def initial_count(self, cell: Cell) -> int:
        """Number of coins the cell mints on first generation."""
        return self._rng.scaled(cell_key(cell), self._coin_rate_mod)

    def get_or_create(self, cell: Cell) -> list[Coin]:
        coins = self._contents.get(cell)
        if coins is None:
            coins = [Coin(cell, index) for index in range(self.initial_count(cell))]
            if self._reserved:
                minted = coins
                coins = [coin for coin in minted if coin not in self._reserved]
                self._reserved.difference_update(minted)
            self._contents[cell] = coins
            logger.debug("Materialized cell %s with %d coins", cell, len(coins))
        return coins

    # -- inspection --

    def is_materialized(self, cell: Cell) -> bool:
        return cell in self._contents

    def peek(self, cell: Cell) -> list[Coin] | None:
        """Return the live list for *cell* without generating it."""
        return self._contents.get(cell)

    def materialized_cells(self) -> list[Cell]:
        """Materialized cells in the order they were first generated or restored."""
        return list(self._contents)

    def items(self) -> Iterable[tuple[Cell, list[Coin]]]:
        return self._contents.items()

    def total_held(self) -> int:
        return sum(len(coins) for coins in self._contents.values())

    def total_generated(self) -> int:
        """Sum of initial mint counts over every materialized cell."""
        return sum(self.initial_count(cell) for cell in self._contents)

    # -- persistence hooks --

    def restore(self, cell: Cell, coins: Iterable[Coin]) -> list[Coin]:
        """Install persisted contents for *cell*, replacing any current list."""
        restored = list(coins)
        self._contents[cell] = restored
        return restored

    def reserve(self, coins: Iterable[Coin]) -> None:
        """Mark coins as already existing so their origin never mints them again."""
        for coin in coins:
            if coin.origin not in self._contents:
                self._reserved.add(coin)

    def reset(self) -> None:
        self._contents.clear()
        self._reserved.clear()
