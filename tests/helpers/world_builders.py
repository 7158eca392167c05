"""Shared builders for world-model tests."""

from __future__ import annotations

from geocoin.config import WorldConfig
from geocoin.core.cache_world import CacheWorld
from geocoin.core.ledger import CoinLedger
from geocoin.core.models import Cell
from geocoin.core.world_state import WorldState
from geocoin.systems.rng import DeterministicRandom

# Unit cells keep positions exact: cell (i, j) spans [i, i+1) x [j, j+1)
UNIT_CONFIG = WorldConfig(cell_size=1.0, start_lat=0.5, start_lng=0.5)


def make_world(config: WorldConfig = UNIT_CONFIG, renderer=None) -> WorldState:
    return WorldState(config, renderer)


def make_ledger(seed: int = 0) -> tuple[CacheWorld, CoinLedger]:
    caches = CacheWorld(DeterministicRandom(seed))
    return caches, CoinLedger(caches)


def find_cells(caches: CacheWorld, count: int = 1, min_coins: int = 1, spawn: bool | None = True) -> list[Cell]:
    """Scan outward from the origin for cells matching the spawn test and coin count."""
    found: list[Cell] = []
    for radius in range(0, 200):
        for i in range(-radius, radius + 1):
            for j in range(-radius, radius + 1):
                if max(abs(i), abs(j)) != radius:
                    continue
                cell = Cell(i, j)
                if spawn is not None and caches.should_spawn(cell) != spawn:
                    continue
                if caches.initial_count(cell) < min_coins:
                    continue
                found.append(cell)
                if len(found) == count:
                    return found
    raise AssertionError("no matching cells near the origin")


def total_coins(world: WorldState) -> int:
    """Coins held anywhere: every cache plus the inventory."""
    return world.caches.total_held() + world.ledger.total_inventory()
