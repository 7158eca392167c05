"""Core data models: Cell, Coin and the canonical cell key format."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import Direction


@dataclass(frozen=True, slots=True, order=True)
class Cell:
    """Immutable integer grid coordinate. The pair is the cell's only identity."""

    i: int = 0
    j: int = 0

    @property
    def key(self) -> str:
        return cell_key(self)

    def offset(self, di: int, dj: int) -> Cell:
        return Cell(self.i + di, self.j + dj)

    def __repr__(self) -> str:
        return f"({self.i}, {self.j})"


@dataclass(frozen=True, slots=True, order=True)
class Coin:
    """A coin identified by the cell that minted it and its mint index.

    ``origin`` is permanent provenance. It never changes when the coin
    moves between caches and the inventory.
    """

    origin: Cell
    index: int

    @property
    def i(self) -> int:
        return self.origin.i

    @property
    def j(self) -> int:
        return self.origin.j

    def __repr__(self) -> str:
        return f"{self.origin.i}:{self.origin.j}#{self.index}"


# Latitude (i) / longitude (j) step per direction, in cells
DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (-1, 0),
    Direction.WEST: (0, -1),
}


def cell_key(cell: Cell) -> str:
    """Canonical ``"{i},{j}"`` key. The only place a cell is formatted as text."""
    return f"{cell.i},{cell.j}"


def parse_cell_key(text: str) -> Cell:
    """Inverse of :func:`cell_key`. Raises ValueError on anything else."""
    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Malformed cell key: {text!r}")
    try:
        i, j = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Malformed cell key: {text!r}") from None
    cell = Cell(i, j)
    if cell_key(cell) != text:
        raise ValueError(f"Non-canonical cell key: {text!r}")
    return cell
