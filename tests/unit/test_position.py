"""Tests for cell position resolution."""

import math

from termbidi.position import CellPosition, ResolvedCellPosition, resolve_positions


def test_absolute_positions_reset_tie_break():
    resolved = resolve_positions([CellPosition.absolute(0, 5.0), CellPosition.absolute(1, 2.5)])
    assert resolved == [ResolvedCellPosition(0, 5.0, 0), ResolvedCellPosition(1, 2.5, 0)]


def test_left_of_predecessor_decrements():
    """An absorbed RTL ligature member sorts immediately left of its anchor."""
    resolved = resolve_positions(
        [
            CellPosition.absolute(0, 10.0),
            CellPosition.left_of_predecessor(1),
            CellPosition.left_of_predecessor(2),
        ]
    )
    assert [r.base for r in resolved] == [10.0, 10.0, 10.0]
    assert [r.tie_break for r in resolved] == [0, -1, -2]
    assert sorted(resolved)[0].source_cell == 2


def test_right_of_predecessor_increments():
    resolved = resolve_positions(
        [
            CellPosition.absolute(0, 10.0),
            CellPosition.right_of_predecessor(1),
            CellPosition.right_of_predecessor(2),
        ]
    )
    assert [r.tie_break for r in resolved] == [0, 1, 2]
    assert [r.source_cell for r in sorted(resolved)] == [0, 1, 2]


def test_first_cell_left_of_nothing_sorts_last():
    resolved = ResolvedCellPosition.resolve(None, CellPosition.left_of_predecessor(0))
    assert resolved.base == math.inf
    assert resolved.tie_break == 0


def test_first_cell_right_of_nothing_sorts_first():
    resolved = ResolvedCellPosition.resolve(None, CellPosition.right_of_predecessor(0))
    assert resolved.base == -math.inf
    assert resolved.tie_break == 0


def test_absorbed_cell_after_sentinel_inherits_it():
    resolved = resolve_positions([CellPosition.left_of_predecessor(0), CellPosition.left_of_predecessor(1)])
    assert resolved[1].base == math.inf
    assert resolved[1].tie_break == -1


def test_order_compares_base_then_tie_break():
    a = ResolvedCellPosition(0, 1.0, 5)
    b = ResolvedCellPosition(1, 2.0, -5)
    c = ResolvedCellPosition(2, 2.0, -4)
    assert a < b < c
    assert not c < b
