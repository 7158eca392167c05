"""Thread-safe event feed exposed via the API."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass

from geocoin.core.models import Cell


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single session event for the API event feed."""

    seq: int
    category: str
    message: str
    cell: Cell | None = None


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Sequence numbers keep increasing across ``clear()`` so pollers using
    ``since`` never see a number reused.
    """

    __slots__ = ("_buffer", "_lock", "_seq")

    def __init__(self, maxlen: int = 2000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._seq = itertools.count(1)

    def append(self, category: str, message: str, cell: Cell | None = None) -> GameEvent:
        with self._lock:
            event = GameEvent(next(self._seq), category, message, cell)
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[GameEvent]:
        """Return all events with sequence number > *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq > seq]

    def latest(self, count: int = 50) -> list[GameEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
