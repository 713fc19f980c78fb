"""Tests for RangeArray."""

import pytest

from termbidi.core.range_array import RangeArray


def test_count_and_indexing():
    ranges = RangeArray([range(0, 3), range(5, 6)])
    assert len(ranges) == 2
    assert ranges[0] == range(0, 3)
    assert ranges[1] == range(5, 6)
    assert ranges[-1] == range(5, 6)
    assert list(ranges) == [range(0, 3), range(5, 6)]


def test_out_of_bounds():
    ranges = RangeArray([range(0, 3)])
    with pytest.raises(IndexError):
        ranges[1]
    with pytest.raises(IndexError):
        ranges[-2]
    with pytest.raises(TypeError):
        ranges["0"]


def test_empty():
    assert len(RangeArray()) == 0
    assert list(RangeArray()) == []


def test_is_a_snapshot_of_its_input():
    source = [range(0, 1)]
    ranges = RangeArray(source)
    source.append(range(4, 5))
    assert len(ranges) == 1


def test_equality():
    assert RangeArray([range(1, 2)]) == RangeArray([range(1, 2)])
    assert RangeArray([range(1, 2)]) != RangeArray([range(1, 3)])
    assert repr(RangeArray([range(1, 2)])) == "RangeArray([1..<2])"
