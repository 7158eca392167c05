"""Equirectangular grid indexing: positions to cells and cell windows."""

from __future__ import annotations

import math

from geocoin.core.models import Cell


def window_offsets(radius: int) -> range:
    """Per-axis offsets of a neighborhood window: ``[-radius, radius)``.

    The window is asymmetric: ``radius`` cells before the center and
    ``radius - 1`` after. Saved positions and reachable caches depend on
    this exact shape, so it must not be widened to ``radius + 1``.
    """
    return range(-radius, radius)


class GridIndex:
    """Maps continuous lat/lng positions onto fixed-size square cells."""

    __slots__ = ("_cell_size",)

    def __init__(self, cell_size: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self._cell_size = cell_size

    @property
    def cell_size(self) -> float:
        return self._cell_size

    # -- lookup --

    def cell_of(self, lat: float, lng: float) -> Cell:
        return Cell(
            math.floor(lat / self._cell_size),
            math.floor(lng / self._cell_size),
        )

    def neighborhood(self, center: Cell, radius: int) -> set[Cell]:
        """Return every cell in the window around *center* (see :func:`window_offsets`)."""
        offsets = window_offsets(radius)
        return {center.offset(di, dj) for di in offsets for dj in offsets}

    # -- geometry for renderers --

    def cell_bounds(self, cell: Cell) -> tuple[tuple[float, float], tuple[float, float]]:
        """Return ``((south, west), (north, east))`` of the cell's rectangle."""
        size = self._cell_size
        return (
            (cell.i * size, cell.j * size),
            ((cell.i + 1) * size, (cell.j + 1) * size),
        )

    def cell_center(self, cell: Cell) -> tuple[float, float]:
        size = self._cell_size
        return ((cell.i + 0.5) * size, (cell.j + 0.5) * size)
