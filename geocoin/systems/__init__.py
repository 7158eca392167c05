"""World systems: keyed RNG and grid indexing."""

from geocoin.systems.grid_index import GridIndex
from geocoin.systems.rng import DeterministicRandom

__all__ = ["DeterministicRandom", "GridIndex"]
