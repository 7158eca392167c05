"""Tests for Cell / Coin identity and the canonical cell key."""

import pytest

from geocoin.core.models import Cell, Coin, cell_key, parse_cell_key


class TestCellKey:

    def test_format(self):
        assert cell_key(Cell(0, 0)) == "0,0"
        assert cell_key(Cell(-3, 12)) == "-3,12"
        assert Cell(5, -5).key == "5,-5"

    def test_parse_roundtrip(self):
        for cell in (Cell(0, 0), Cell(-1, 1), Cell(369995, -1220533)):
            assert parse_cell_key(cell_key(cell)) == cell

    @pytest.mark.parametrize("text", ["", "1", "1,2,3", "a,b", " 1,2", "1, 2", "-0,0", "01,2"])
    def test_parse_rejects_non_canonical(self, text):
        with pytest.raises(ValueError):
            parse_cell_key(text)


class TestCoinIdentity:

    def test_equality_uses_all_fields(self):
        assert Coin(Cell(1, 2), 3) == Coin(Cell(1, 2), 3)
        assert Coin(Cell(1, 2), 3) != Coin(Cell(1, 2), 4)
        assert Coin(Cell(1, 2), 3) != Coin(Cell(2, 1), 3)

    def test_hashable_and_frozen(self):
        coin = Coin(Cell(0, 0), 0)
        assert len({coin, Coin(Cell(0, 0), 0)}) == 1
        with pytest.raises(Exception):
            coin.index = 5  # type: ignore

    def test_origin_shortcuts(self):
        coin = Coin(Cell(-4, 9), 2)
        assert (coin.i, coin.j, coin.index) == (-4, 9, 2)
