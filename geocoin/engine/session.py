"""GameSession — serializes every world mutation and persists after each one.

Position updates may arrive from HTTP requests and from the sensor thread
at the same time. Each one takes the session lock and runs to completion
(cell diff, cache generation, persistence write) before the next starts,
so the ownership ledger is never observed half-updated.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from geocoin.core.enums import Direction, ViewEventKind
from geocoin.core.errors import MalformedPersistedStateError, NotFoundError
from geocoin.core.models import DIRECTION_OFFSETS, Cell, Coin
from geocoin.core.world_state import WorldState
from geocoin.engine.sensor import LatestFix, PositionSource, SensorFollower
from geocoin.persistence.gateway import JsonFileStore, KeyValueStore, MemoryStore, PersistenceGateway
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import WorldConfig
    from geocoin.core.viewport import RenderingLayer, ViewEvent

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the WorldState lifecycle and is the only writer to it.

    Provides thread-safe access to:
      - movement (move_to / nudge) and the resulting show/hide events
      - coin transfers (take / give and their popup-button variants)
      - reset with confirmation, and the sensor-follow toggle
    """

    def __init__(
        self,
        config: WorldConfig,
        store: KeyValueStore | None = None,
        renderer: RenderingLayer | None = None,
    ) -> None:
        self.config = config
        if store is None:
            store = JsonFileStore(config.state_dir) if config.state_dir else MemoryStore()
        self._gateway = PersistenceGateway(store)
        self._world = WorldState(config, renderer)
        self._event_log = EventLog()
        self._lock = threading.RLock()
        self._sensor: SensorFollower | None = None
        self.device_fix = LatestFix()
        self._load_errors: list[MalformedPersistedStateError] = []
        self._loaded = False

    # -- public properties --

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def gateway(self) -> PersistenceGateway:
        return self._gateway

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def load_errors(self) -> list[MalformedPersistedStateError]:
        return list(self._load_errors)

    @property
    def sensor_running(self) -> bool:
        return self._sensor is not None and self._sensor.running

    # -- lifecycle --

    def start(self) -> list[ViewEvent]:
        """Restore persisted state and materialize the start neighborhood."""
        with self._lock:
            logger.info("Session started at (%.6f, %.6f)", self._world.lat, self._world.lng)
            return self._move_locked(self._world.lat, self._world.lng)

    def close(self) -> None:
        self.stop_sensor()
        with self._lock:
            self._world.teardown()
        logger.info("Session closed.")

    def reset_all(self, confirm: bool = True) -> bool:
        """Clear persisted and in-memory state, then recenter at the start.

        Does nothing and returns False unless *confirm* is set.
        """
        if not confirm:
            logger.info("Reset cancelled.")
            return False
        with self._lock:
            self._gateway.clear()
            self._loaded = True
            self._record(self._world.reset())
            self._event_log.append("reset", "World reset to start position.")
            self._move_locked(self._world.lat, self._world.lng)
        return True

    # -- movement --

    def move_to(self, lat: float, lng: float) -> list[ViewEvent]:
        with self._lock:
            return self._move_locked(lat, lng)

    def nudge(self, direction: Direction) -> list[ViewEvent]:
        """Step one cell in *direction*.

        Falls back to the target cell's center when float rounding would
        land the step in the wrong cell.
        """
        di, dj = DIRECTION_OFFSETS[direction]
        step = self.config.cell_size
        with self._lock:
            world = self._world
            target = world.player_cell.offset(di, dj)
            lat, lng = world.lat + di * step, world.lng + dj * step
            if world.grid.cell_of(lat, lng) != target:
                lat, lng = world.grid.cell_center(target)
            return self._move_locked(lat, lng)

    # -- coin transfers --

    def take(self, coin: Coin, cell: Cell) -> None:
        with self._lock:
            self._transfer(self._world.ledger.take, coin, cell, "take")

    def give(self, coin: Coin, cell: Cell) -> None:
        with self._lock:
            self._transfer(self._world.ledger.give, coin, cell, "give")

    def take_any(self, cell: Cell) -> Coin:
        with self._lock:
            return self._transfer(self._world.ledger.take_any, None, cell, "take")

    def give_any(self, cell: Cell) -> Coin:
        with self._lock:
            return self._transfer(self._world.ledger.give_any, None, cell, "give")

    # -- sensor follow --

    def start_sensor(self, source: PositionSource, interval: float | None = None) -> None:
        with self._lock:
            if self.sensor_running:
                return
            self._sensor = SensorFollower(
                self, source, interval if interval is not None else self.config.sensor_poll_seconds
            )
            self._sensor.start()

    def stop_sensor(self) -> None:
        sensor = self._sensor
        if sensor is not None:
            sensor.stop()
        self._sensor = None

    # -- read access --

    def status_text(self) -> str:
        points = self._world.ledger.total_inventory()
        if points == 0:
            return "No points yet..."
        return f"{points} points accumulated"

    def inventory(self) -> tuple[Coin, ...]:
        with self._lock:
            self._ensure_loaded()
            return self._world.ledger.inventory

    def shown_caches(self) -> list[tuple[Cell, tuple[Coin, ...]]]:
        with self._lock:
            self._ensure_loaded()
            return [
                (cell, tuple(self._world.caches.get_or_create(cell)))
                for cell in self._world.viewport.shown_cells()
            ]

    def cache_contents(self, cell: Cell) -> tuple[Coin, ...] | None:
        """Coins of a cache site (materialized on demand), None for other cells."""
        with self._lock:
            self._ensure_loaded()
            caches = self._world.caches
            if not caches.should_spawn(cell):
                return None
            held = caches.peek(cell)
            if held is not None:
                return tuple(held)
            contents = tuple(caches.get_or_create(cell))
            self._gateway.save(self._world)
            return contents

    # -- internals --

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._load_errors = self._gateway.load(self._world)
        for err in self._load_errors:
            self._event_log.append("warning", str(err))
        self._loaded = True

    def _move_locked(self, lat: float, lng: float) -> list[ViewEvent]:
        self._ensure_loaded()
        previous = self._world.player_cell
        events = self._world.move_to(lat, lng)
        current = self._world.player_cell
        if current != previous:
            self._event_log.append("move", f"Player entered cell {current}", current)
        self._record(events)
        self._gateway.save(self._world)
        return events

    def _transfer(self, operation, coin: Coin | None, cell: Cell, verb: str) -> Coin:
        self._ensure_loaded()
        try:
            result = operation(coin, cell) if coin is not None else operation(cell)
        except NotFoundError as exc:
            logger.warning("Rejected %s at %s: %s", verb, cell, exc)
            self._event_log.append("rejected", str(exc), cell)
            raise
        moved = coin if coin is not None else result
        self._event_log.append(verb, f"{verb} {moved!r} at {cell}. {self.status_text()}", cell)
        self._gateway.save(self._world)
        return moved

    def _record(self, events: list[ViewEvent]) -> None:
        for event in events:
            if event.kind == ViewEventKind.SHOW:
                count = len(event.coins) if event.coins is not None else 0
                self._event_log.append("show", f"Cache {event.cell} has {count} coins", event.cell)
            else:
                self._event_log.append("hide", f"Cache {event.cell} out of range", event.cell)
