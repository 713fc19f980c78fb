"""Tests for terminal cell helpers."""

from termbidi.cells import DWC_RIGHT, EMPTY_CELL, cells_from_text, cells_to_string, number_of_trailing_empty_cells


def test_ascii_is_one_cell_per_character():
    assert cells_from_text("ab c") == ["a", "b", " ", "c"]


def test_wide_character_takes_two_cells():
    assert cells_from_text("a中b") == ["a", "中", DWC_RIGHT, "b"]


def test_combining_mark_joins_previous_cell():
    assert cells_from_text("e\u0301x") == ["e\u0301", "x"]


def test_combining_mark_on_wide_character():
    assert cells_from_text("中\u0301") == ["中\u0301", DWC_RIGHT]


def test_leading_combining_mark_gets_its_own_cell():
    assert cells_from_text("\u0301a") == ["\u0301", "a"]


def test_custom_width_function():
    assert cells_from_text("ab", get_width=lambda c: 2) == ["a", DWC_RIGHT, "b", DWC_RIGHT]


def test_trailing_empty_cells():
    assert number_of_trailing_empty_cells(["a", EMPTY_CELL, EMPTY_CELL]) == 2
    assert number_of_trailing_empty_cells(["a", " ", EMPTY_CELL]) == 1
    assert number_of_trailing_empty_cells(["a", " ", EMPTY_CELL], space_is_empty=True) == 2
    assert number_of_trailing_empty_cells([EMPTY_CELL, EMPTY_CELL]) == 2
    assert number_of_trailing_empty_cells([]) == 0


def test_cells_to_string():
    cells = ["a", "中", DWC_RIGHT, "e\u0301", EMPTY_CELL, "b"]
    text, deltas = cells_to_string(cells)
    assert text == "a中e\u0301 b"
    assert [deltas.cell_for(i) for i in range(len(text))] == [0, 1, 3, 3, 4, 5]


def test_private_use_character_is_ordinary_text():
    """U+F8FF is a printable character, not the wide-character placeholder."""
    cells = cells_from_text("a\uf8ffb")
    assert cells == ["a", "\uf8ff", "b"]
    assert all(cell is not DWC_RIGHT for cell in cells)

    text, deltas = cells_to_string(cells)
    assert text == "a\uf8ffb"
    assert [deltas.cell_for(i) for i in range(len(text))] == [0, 1, 2]


def test_combining_mark_after_private_use_character_stays_with_it():
    assert cells_from_text("x\uf8ff\u0301") == ["x", "\uf8ff\u0301"]


def test_placeholder_is_not_a_string():
    assert not isinstance(DWC_RIGHT, str)
    assert repr(DWC_RIGHT) == "DWC_RIGHT"
