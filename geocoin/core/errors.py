"""Error kinds raised by the world model."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.core.models import Coin


class GeoCoinError(Exception):
    """Base class for all world-model errors."""


class NotFoundError(GeoCoinError, LookupError):
    """A coin was not where a transfer expected to find it.

    Signals a caller bug or a stale UI reference; the ledger is unchanged
    when this is raised.
    """

    def __init__(self, coin: Coin | None, source: str) -> None:
        self.coin = coin
        self.source = source
        what = repr(coin) if coin is not None else "any coin"
        super().__init__(f"{what} not found in {source}")


class MalformedPersistedStateError(GeoCoinError, ValueError):
    """A persisted blob does not decode to the expected shape."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Persisted blob {key!r} is malformed: {reason}")
