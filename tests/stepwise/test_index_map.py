"""
Tests for IndexMap position bookkeeping.
"""

from dataclasses import FrozenInstanceError

import pytest

from pystepwise.stepwise import IndexMap


class TestIndexMap:

    def test_identity(self):
        m = IndexMap.identity(3)
        assert m.originals == (0, 1, 2)
        assert len(m) == 3
        assert list(m) == [0, 1, 2]

    def test_identity_requires_columns(self):
        with pytest.raises(ValueError):
            IndexMap.identity(0)

    def test_remove_shifts_later_positions(self):
        m = IndexMap.identity(5).remove([1, 3])
        assert m.originals == (0, 2, 4)
        assert m.original(1) == 2
        assert m.original(2) == 4

    def test_successive_removals(self):
        m = IndexMap.identity(5).remove([0]).remove([1])
        # after dropping 0, position 1 holds original 2
        assert m.originals == (1, 3, 4)

    def test_position_lookup(self):
        m = IndexMap.identity(4).remove([1])
        assert m.position(3) == 2
        with pytest.raises(KeyError):
            m.position(1)

    def test_remove_returns_new_map(self):
        m = IndexMap.identity(3)
        m.remove([0])
        assert m.originals == (0, 1, 2)

    def test_remove_out_of_range(self):
        with pytest.raises(IndexError):
            IndexMap.identity(2).remove([2])

    def test_original_out_of_range(self):
        with pytest.raises(IndexError):
            IndexMap.identity(2).original(-1)

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            IndexMap.identity(2).originals = (5,)
