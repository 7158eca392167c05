"""Deterministic string-keyed RNG using xxhash.

The Golden Rule: a cell's contents depend ONLY on WorldSeed + CellKey.
Nothing about call order, process lifetime or persisted state may change
the value drawn for a key.

Formula: RNG_Value = Hash(WorldSeed, Key)
"""

from __future__ import annotations

import xxhash


class DeterministicRandom:
    """Stateless keyed pseudo-random number generator.

    Each call is a pure function of (seed, key) with no internal mutable
    state, therefore fully thread-safe and stable across restarts.
    """

    __slots__ = ("_seed",)

    # 53 bits is the full mantissa of a double, so the result never rounds to 1.0
    _FLOAT_BITS = 53
    _SCALE = 1.0 / (1 << _FLOAT_BITS)

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, key: str) -> int:
        return xxhash.xxh64(key.encode("utf-8"), seed=self._seed).intdigest()

    def value(self, key: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return (self._hash(key) >> (64 - self._FLOAT_BITS)) * self._SCALE

    def scaled(self, key: str, modulus: int) -> int:
        """Return ``floor(value(key) * modulus)``, an integer in [0, modulus)."""
        return int(self.value(key) * modulus)

    def chance(self, key: str, probability: float) -> bool:
        """Return True with the given probability."""
        return self.value(key) < probability
