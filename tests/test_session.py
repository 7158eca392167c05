"""Tests for GameSession — the single writer over WorldState.

Covers:
- Startup materializes the start neighborhood and persists it
- Nudges move exactly one cell, even with degree-sized cells
- Transfers persist after every mutation; failed transfers change nothing
- Reset requires confirmation and regenerates from scratch
- State survives a restart through a shared store
"""

import threading

import pytest

from geocoin.config import WorldConfig
from geocoin.core.enums import Direction, ViewEventKind
from geocoin.core.errors import NotFoundError
from geocoin.core.models import Cell, Coin
from geocoin.engine.session import GameSession
from geocoin.persistence.codec import CACHE_DATA_KEY, INVENTORY_KEY
from geocoin.persistence.gateway import MemoryStore
from tests.helpers.world_builders import UNIT_CONFIG, find_cells, total_coins


def _session(store=None, config=UNIT_CONFIG) -> GameSession:
    session = GameSession(config, store=store if store is not None else MemoryStore())
    session.start()
    return session


def _cache_with_coins(session: GameSession, minimum: int = 1) -> Cell:
    for cell, coins in session.shown_caches():
        if len(coins) >= minimum:
            return cell
    pytest.skip("no cache with enough coins in the start neighborhood")


class TestStartup:

    def test_start_shows_neighborhood(self):
        store = MemoryStore()
        session = _session(store)
        world = session.world
        assert world.player_cell == Cell(0, 0)
        shown = set(world.viewport.shown_cells())
        assert shown == {c for c in world.grid.neighborhood(Cell(0, 0), 8) if world.caches.should_spawn(c)}
        assert store.get(CACHE_DATA_KEY) is not None
        assert store.get(INVENTORY_KEY) == "[]"

    def test_start_twice_is_idempotent(self):
        session = _session()
        assert session.start() == []

    def test_status_text(self):
        session = _session()
        assert session.status_text() == "No points yet..."
        cell = _cache_with_coins(session, 2)
        session.take_any(cell)
        session.take_any(cell)
        assert session.status_text() == "2 points accumulated"


class TestMovement:

    @pytest.mark.parametrize(
        "direction, delta",
        [(Direction.NORTH, (1, 0)), (Direction.SOUTH, (-1, 0)), (Direction.EAST, (0, 1)), (Direction.WEST, (0, -1))],
    )
    def test_nudge_moves_one_cell(self, direction, delta):
        session = _session()
        session.nudge(direction)
        assert session.world.player_cell == Cell(*delta)

    def test_nudge_with_small_cells(self):
        session = _session(config=WorldConfig())
        start = session.world.player_cell
        for step in range(1, 26):
            session.nudge(Direction.NORTH)
            assert session.world.player_cell == start.offset(step, 0)
        for step in range(1, 26):
            session.nudge(Direction.WEST)
            assert session.world.player_cell == start.offset(25, -step)

    def test_move_saves_and_logs(self):
        session = _session()
        saves = session.gateway.save_count
        events = session.move_to(20.5, 0.5)
        assert session.gateway.save_count == saves + 1
        categories = {e.category for e in session.event_log.since(0)}
        assert "move" in categories
        if any(e.kind == ViewEventKind.HIDE for e in events):
            assert "hide" in categories


class TestTransfers:

    def test_take_and_give(self):
        session = _session()
        cell = _cache_with_coins(session, 1)
        saves = session.gateway.save_count
        coin = session.take_any(cell)
        assert session.inventory() == (coin,)
        session.give(coin, cell)
        assert session.inventory() == ()
        assert session.gateway.save_count == saves + 2

    def test_plain_cell_holds_no_coins(self):
        store = MemoryStore()
        session = _session(store)
        (plain,) = find_cells(session.world.caches, min_coins=10, spawn=False)
        blob = store.get(CACHE_DATA_KEY)

        with pytest.raises(NotFoundError):
            session.take(Coin(plain, 0), plain)

        assert session.cache_contents(plain) is None
        assert session.inventory() == ()
        assert not session.world.caches.is_materialized(plain)
        assert store.get(CACHE_DATA_KEY) == blob

    def test_failed_take_changes_nothing(self):
        store = MemoryStore()
        session = _session(store)
        cell = _cache_with_coins(session, 1)
        before = dict(session.shown_caches())
        blob = store.get(CACHE_DATA_KEY)

        with pytest.raises(NotFoundError):
            session.take(Coin(Cell(5000, 5000), 0), cell)

        assert dict(session.shown_caches()) == before
        assert session.inventory() == ()
        assert store.get(CACHE_DATA_KEY) == blob
        assert session.event_log.latest(1)[0].category == "rejected"

    def test_concurrent_transfers_conserve(self):
        session = _session()
        cells = [cell for cell, _ in session.shown_caches()]
        total = total_coins(session.world)

        def worker():
            for _ in range(50):
                for cell in cells:
                    try:
                        coin = session.take_any(cell)
                        session.give(coin, cells[0])
                    except NotFoundError:
                        pass

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert total_coins(session.world) == total


class TestResetAndRestart:

    def test_reset_requires_confirmation(self):
        session = _session()
        cell = _cache_with_coins(session, 1)
        session.take_any(cell)
        assert session.reset_all(confirm=False) is False
        assert len(session.inventory()) == 1

    def test_reset_regenerates(self):
        store = MemoryStore()
        session = _session(store)
        cell = _cache_with_coins(session, 1)
        original = session.cache_contents(cell)
        session.take_any(cell)
        session.nudge(Direction.EAST)

        assert session.reset_all(confirm=True) is True
        assert session.inventory() == ()
        assert session.world.player_cell == Cell(0, 0)
        assert session.cache_contents(cell) == original
        assert store.get(INVENTORY_KEY) == "[]"

    def test_restart_restores_ledger(self):
        store = MemoryStore()
        first = _session(store)
        cell = _cache_with_coins(first, 2)
        taken = first.take_any(cell)
        remaining = first.cache_contents(cell)
        first.close()

        second = _session(store)
        assert second.inventory() == (taken,)
        assert second.cache_contents(cell) == remaining

    def test_malformed_store_does_not_block_start(self):
        store = MemoryStore({CACHE_DATA_KEY: "[[", INVENTORY_KEY: "nope"})
        session = _session(store)
        assert {e.key for e in session.load_errors} == {CACHE_DATA_KEY, INVENTORY_KEY}
        assert session.inventory() == ()
        assert session.world.viewport.shown_cells()
