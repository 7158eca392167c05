"""Sensor follow: poll a position source and move the player on a background thread."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from geocoin.engine.session import GameSession

logger = logging.getLogger(__name__)


class PositionSource(Protocol):
    """Geolocation provider. Returns (lat, lng), or None when no fix is available."""

    def read(self) -> tuple[float, float] | None: ...


class FixedPosition:
    """Always reports the same position."""

    __slots__ = ("lat", "lng")

    def __init__(self, lat: float, lng: float) -> None:
        self.lat = lat
        self.lng = lng

    def read(self) -> tuple[float, float] | None:
        return self.lat, self.lng


class ScriptedPath:
    """Replays a fixed list of positions, then keeps reporting the last one."""

    __slots__ = ("_positions", "_cursor", "_lock")

    def __init__(self, positions: Iterable[tuple[float, float]]) -> None:
        self._positions = list(positions)
        self._cursor = 0
        self._lock = threading.Lock()

    def read(self) -> tuple[float, float] | None:
        with self._lock:
            if not self._positions:
                return None
            idx = min(self._cursor, len(self._positions) - 1)
            self._cursor += 1
            return self._positions[idx]


class SensorFollower:
    """Periodically reads a PositionSource and forwards new fixes to the session."""

    def __init__(self, session: GameSession, source: PositionSource, interval: float) -> None:
        self._session = session
        self._source = source
        self._interval = max(0.01, interval)
        self._last: tuple[float, float] | None = None
        self._thread: threading.Thread | None = None
        self._stop_requested = threading.Event()
        self._polls = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def polls(self) -> int:
        return self._polls

    def start(self) -> None:
        if self.running:
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(target=self._run_loop, name="sensor-follow", daemon=True)
        self._thread.start()
        logger.info("Sensor follow started (interval=%.2fs)", self._interval)

    def stop(self) -> None:
        self._stop_requested.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5.0)
        logger.info("Sensor follow stopped.")

    def poll_once(self) -> bool:
        """Read one fix; move the player if it changed. Returns True on a move."""
        self._polls += 1
        fix = self._source.read()
        if fix is None or fix == self._last:
            return False
        self._last = fix
        self._session.move_to(*fix)
        return True

    def _run_loop(self) -> None:
        while not self._stop_requested.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Position update failed; sensor follow keeps polling")
            self._stop_requested.wait(self._interval)


class LatestFix:
    """Holds the most recent fix pushed by a client device (watchPosition style)."""

    __slots__ = ("_fix", "_lock")

    def __init__(self) -> None:
        self._fix: tuple[float, float] | None = None
        self._lock = threading.Lock()

    def push(self, lat: float, lng: float) -> None:
        with self._lock:
            self._fix = (lat, lng)

    def read(self) -> tuple[float, float] | None:
        with self._lock:
            return self._fix
