"""Viewport tracking: which caches are currently materialized near the player."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Protocol

from geocoin.core.cache_world import CacheWorld
from geocoin.core.enums import ViewEventKind
from geocoin.core.models import Cell, Coin, cell_key
from geocoin.systems.grid_index import GridIndex

logger = logging.getLogger(__name__)

NEIGHBORHOOD_SIZE = 8


@dataclass(frozen=True, slots=True)
class ViewEvent:
    """A show/hide notification for the rendering layer.

    ``coins`` is the cell's live list on SHOW (it keeps changing after the
    event) and ``None`` on HIDE.
    """

    kind: ViewEventKind
    cell: Cell
    coins: list[Coin] | None = None


class RenderingLayer(Protocol):
    """Map-side collaborator. Never mutates coin data directly."""

    def show(self, cell: Cell, coins: list[Coin]) -> Hashable: ...

    def hide(self, cell: Cell, handle: Any) -> None: ...


class NullRenderer:
    """Headless renderer. The handle is the cell key."""

    def show(self, cell: Cell, coins: list[Coin]) -> str:
        return cell_key(cell)

    def hide(self, cell: Cell, handle: Any) -> None:
        return None


class ViewportManager:
    """Diffs the shown-cache set against the neighborhood of the player's cell."""

    __slots__ = ("_caches", "_grid", "_radius", "_renderer", "_shown")

    def __init__(
        self,
        caches: CacheWorld,
        grid: GridIndex,
        radius: int = NEIGHBORHOOD_SIZE,
        renderer: RenderingLayer | None = None,
    ) -> None:
        self._caches = caches
        self._grid = grid
        self._radius = radius
        self._renderer: RenderingLayer = renderer if renderer is not None else NullRenderer()
        self._shown: dict[Cell, Any] = {}

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def renderer(self) -> RenderingLayer:
        return self._renderer

    @renderer.setter
    def renderer(self, value: RenderingLayer | None) -> None:
        self._renderer = value if value is not None else NullRenderer()

    def is_shown(self, cell: Cell) -> bool:
        return cell in self._shown

    def shown_cells(self) -> list[Cell]:
        return list(self._shown)

    def handle_of(self, cell: Cell) -> Any:
        return self._shown.get(cell)

    # -- diffing --

    def on_move(self, center: Cell) -> list[ViewEvent]:
        """Hide caches that left the window, show cache sites that entered it."""
        keep = self._grid.neighborhood(center, self._radius)
        events: list[ViewEvent] = []

        for cell in [c for c in self._shown if c not in keep]:
            events.append(self._hide(cell))

        # Row-major order so SHOW events are reproducible for a given center
        for cell in sorted(keep):
            if cell in self._shown or not self._caches.should_spawn(cell):
                continue
            coins = self._caches.get_or_create(cell)
            self._shown[cell] = self._renderer.show(cell, coins)
            events.append(ViewEvent(ViewEventKind.SHOW, cell, coins))
            logger.debug("Showing cache %s (%d coins)", cell, len(coins))

        return events

    def hide_all(self) -> list[ViewEvent]:
        return [self._hide(cell) for cell in list(self._shown)]

    def _hide(self, cell: Cell) -> ViewEvent:
        handle = self._shown.pop(cell)
        self._renderer.hide(cell, handle)
        logger.debug("Hiding cache %s", cell)
        return ViewEvent(ViewEventKind.HIDE, cell)
