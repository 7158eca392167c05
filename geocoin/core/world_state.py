"""Mutable authoritative world state — only mutated through GameSession."""

from __future__ import annotations

import logging

from geocoin.config import WorldConfig
from geocoin.core.cache_world import CacheWorld
from geocoin.core.ledger import CoinLedger
from geocoin.core.models import Cell
from geocoin.core.viewport import RenderingLayer, ViewEvent, ViewportManager
from geocoin.systems.grid_index import GridIndex
from geocoin.systems.rng import DeterministicRandom

logger = logging.getLogger(__name__)


class WorldState:
    """The single source of truth for one player's world.

    Holds the cache contents, the inventory ledger, the shown-cache set and
    the player's position. Built once per session, cleared by ``reset`` and
    released by ``teardown``.
    """

    __slots__ = ("config", "rng", "grid", "caches", "ledger", "viewport", "lat", "lng", "_torn_down")

    def __init__(self, config: WorldConfig, renderer: RenderingLayer | None = None) -> None:
        self.config: WorldConfig = config
        self.rng = DeterministicRandom(config.world_seed)
        self.grid = GridIndex(config.cell_size)
        self.caches = CacheWorld(self.rng, config.coin_rate_mod, config.spawn_probability)
        self.ledger = CoinLedger(self.caches)
        self.viewport = ViewportManager(self.caches, self.grid, config.neighborhood_size, renderer)
        self.lat: float = config.start_lat
        self.lng: float = config.start_lng
        self._torn_down = False

    @property
    def player_cell(self) -> Cell:
        return self.grid.cell_of(self.lat, self.lng)

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def move_to(self, lat: float, lng: float) -> list[ViewEvent]:
        """Place the player at (lat, lng) and refresh the viewport."""
        self.lat = lat
        self.lng = lng
        return self.viewport.on_move(self.player_cell)

    def reset(self) -> list[ViewEvent]:
        """Drop all coin data and return the player to the start position.

        The returned HIDE events let the renderer clear its markers; the
        caller refreshes the viewport afterwards.
        """
        events = self.viewport.hide_all()
        self.caches.reset()
        self.ledger.reset()
        self.lat = self.config.start_lat
        self.lng = self.config.start_lng
        logger.info("World state reset")
        return events

    def teardown(self) -> None:
        if self._torn_down:
            return
        self.viewport.hide_all()
        self.viewport.renderer = None
        self._torn_down = True
