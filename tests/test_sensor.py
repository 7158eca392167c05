"""Tests for sensor follow — polled position updates on a background thread."""

import time

from geocoin.core.models import Cell
from geocoin.engine.sensor import FixedPosition, LatestFix, ScriptedPath, SensorFollower
from geocoin.engine.session import GameSession
from geocoin.persistence.gateway import MemoryStore
from tests.helpers.world_builders import UNIT_CONFIG


def _session() -> GameSession:
    session = GameSession(UNIT_CONFIG, store=MemoryStore())
    session.start()
    return session


def _wait_for(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestPolling:

    def test_poll_once_moves_on_new_fix(self):
        session = _session()
        follower = SensorFollower(session, ScriptedPath([(3.5, 0.5), (3.5, 0.5), (4.5, 0.5)]), 1.0)
        assert follower.poll_once() is True
        assert session.world.player_cell == Cell(3, 0)
        # Repeated fix is ignored
        assert follower.poll_once() is False
        assert follower.poll_once() is True
        assert session.world.player_cell == Cell(4, 0)
        assert follower.polls == 3

    def test_no_fix_no_move(self):
        session = _session()
        follower = SensorFollower(session, LatestFix(), 1.0)
        assert follower.poll_once() is False
        assert session.world.player_cell == Cell(0, 0)

    def test_scripted_path_holds_last(self):
        path = ScriptedPath([(1.0, 1.0), (2.0, 2.0)])
        assert [path.read() for _ in range(4)] == [(1.0, 1.0), (2.0, 2.0), (2.0, 2.0), (2.0, 2.0)]
        assert ScriptedPath([]).read() is None


class TestBackgroundThread:

    def test_session_toggle(self):
        session = _session()
        session.start_sensor(FixedPosition(7.5, -2.5), interval=0.01)
        try:
            assert session.sensor_running
            assert _wait_for(lambda: session.world.player_cell == Cell(7, -3))
        finally:
            session.stop_sensor()
        assert not session.sensor_running

    def test_device_fix_follow(self):
        session = _session()
        session.start_sensor(session.device_fix, interval=0.01)
        try:
            session.device_fix.push(-4.5, 9.5)
            assert _wait_for(lambda: session.world.player_cell == Cell(-5, 9))
        finally:
            session.close()
        assert not session.sensor_running
