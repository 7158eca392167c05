"""Enumerations used throughout the world model."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal nudge directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class ViewEventKind(IntEnum):
    """What happened to a cell's on-map materialization."""

    SHOW = 0
    HIDE = 1
