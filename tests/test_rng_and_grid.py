"""Tests for the keyed DeterministicRandom and GridIndex.

Covers:
- Same key -> same value, across instances
- Values stay inside [0, 1) and spread over the interval
- Adjacent cell keys do not cluster
- cell_of flooring (including negative coordinates)
- The asymmetric [-radius, radius) neighborhood window
"""

import statistics

import pytest
import xxhash

from geocoin.core.models import Cell, cell_key
from geocoin.systems.grid_index import GridIndex, window_offsets
from geocoin.systems.rng import DeterministicRandom


def _reference_value(key: str, seed: int = 0) -> float:
    """Independent re-statement of the draw: top 53 bits of xxh64 over the key."""
    return (xxhash.xxh64(key.encode("utf-8"), seed=seed).intdigest() >> 11) / float(1 << 53)


class TestDeterministicRandom:

    def test_same_key_same_value(self):
        a = DeterministicRandom(0)
        b = DeterministicRandom(0)
        for key in ("0,0", "1,-1", "-369995,1220533", ""):
            assert a.value(key) == b.value(key)

    def test_matches_reference_formula(self):
        rng = DeterministicRandom(0)
        for key in ("0,0", "0,1", "12,-7"):
            assert rng.value(key) == _reference_value(key)

    def test_seed_changes_stream(self):
        keys = [f"{i},0" for i in range(20)]
        a = [DeterministicRandom(0).value(k) for k in keys]
        b = [DeterministicRandom(1).value(k) for k in keys]
        assert a != b

    def test_values_in_unit_interval(self):
        rng = DeterministicRandom(7)
        for i in range(-30, 30):
            for j in range(-30, 30):
                v = rng.value(cell_key(Cell(i, j)))
                assert 0.0 <= v < 1.0

    def test_uniform_spread(self):
        rng = DeterministicRandom(0)
        values = [rng.value(cell_key(Cell(i, j))) for i in range(-50, 50) for j in range(-50, 50)]
        # 10k draws: mean near 0.5, every decile populated
        assert abs(statistics.fmean(values) - 0.5) < 0.02
        buckets = [0] * 10
        for v in values:
            buckets[int(v * 10)] += 1
        assert min(buckets) > 800

    def test_adjacent_keys_do_not_cluster(self):
        rng = DeterministicRandom(0)
        row = [rng.value(cell_key(Cell(0, j))) for j in range(2000)]
        diffs = [abs(a - b) for a, b in zip(row, row[1:])]
        # Independent uniforms: E|X - Y| = 1/3
        assert abs(statistics.fmean(diffs) - 1 / 3) < 0.03

    def test_scaled_and_chance(self):
        rng = DeterministicRandom(0)
        key = "3,4"
        assert rng.scaled(key, 100) == int(rng.value(key) * 100)
        assert 0 <= rng.scaled(key, 100) < 100
        assert rng.chance(key, 1.0) is True
        assert rng.chance(key, 0.0) is False


class TestGridIndex:

    def test_cell_of_floors(self):
        grid = GridIndex(1.0)
        assert grid.cell_of(0.0, 0.0) == Cell(0, 0)
        assert grid.cell_of(0.99, 2.5) == Cell(0, 2)
        assert grid.cell_of(-0.01, -1.0) == Cell(-1, -1)
        assert grid.cell_of(-1.5, 3.0) == Cell(-2, 3)

    def test_cell_of_small_cells(self):
        grid = GridIndex(1e-4)
        cell = grid.cell_of(36.99955, -122.05325)
        lat, lng = grid.cell_center(cell)
        assert grid.cell_of(lat, lng) == cell

    def test_window_is_asymmetric(self):
        offsets = list(window_offsets(8))
        assert offsets[0] == -8
        assert offsets[-1] == 7
        assert len(offsets) == 16

    def test_neighborhood_bounds(self):
        grid = GridIndex(1.0)
        cells = grid.neighborhood(Cell(10, -3), 8)
        assert len(cells) == 256
        assert min(c.i for c in cells) == 2
        assert max(c.i for c in cells) == 17
        assert min(c.j for c in cells) == -11
        assert max(c.j for c in cells) == 4
        # radius cells before the center, radius - 1 after
        assert Cell(18, -3) not in cells
        assert Cell(2, -3) in cells

    def test_cell_bounds(self):
        grid = GridIndex(0.5)
        (south, west), (north, east) = grid.cell_bounds(Cell(2, -1))
        assert (south, west) == (1.0, -0.5)
        assert (north, east) == (1.5, 0.0)
        assert grid.cell_center(Cell(2, -1)) == (1.25, -0.25)

    def test_rejects_non_positive_cell_size(self):
        with pytest.raises(ValueError):
            GridIndex(0.0)
