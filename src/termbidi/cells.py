"""Terminal cell lines and their conversion to shaper input."""

from functools import lru_cache
from typing import Callable, List, Sequence, Tuple, Union

from wcwidth import wcwidth

from .lut import DeltaTable

# Empty (null) cell
EMPTY_CELL = ""


class _WideCharRight:
    """Placeholder cell for the right half of a double-width character.

    Not a str, so no text can be mistaken for it.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "DWC_RIGHT"


DWC_RIGHT = _WideCharRight()

Cell = Union[str, _WideCharRight]


@lru_cache(maxsize=4096)
def default_char_width(char: str) -> int:
    """Cell width of a single character: 0 for combining marks, 1 or 2 otherwise."""
    # Fast path for printable ASCII
    if " " <= char <= "~":
        return 1
    width = wcwidth(char)
    if width < 0:
        # Control characters still take a cell when written to the grid
        return 1
    return width


def cells_from_text(text: str, get_width: Callable[[str], int] = None) -> List[Cell]:
    """
    Split text into terminal cells.

    Zero-width characters join the cell before them, wide characters are
    followed by a DWC_RIGHT cell.

    Args:
        text: Text to lay out
        get_width: Width of a single character (defaults to wcwidth)

    Returns:
        List of cells: strings, or DWC_RIGHT
    """
    get_width = get_width or default_char_width
    cells: List[Cell] = []
    for char in text:
        width = get_width(char)
        if width == 0 and cells:
            # Combining marks on a wide character belong to its left half
            owner = len(cells) - 2 if cells[-1] is DWC_RIGHT else len(cells) - 1
            cells[owner] += char
        elif width == 2:
            cells.append(char)
            cells.append(DWC_RIGHT)
        else:
            cells.append(char)
    return cells


def number_of_trailing_empty_cells(cells: Sequence[Cell], space_is_empty: bool = False) -> int:
    """Count empty cells at the end of a line."""
    empty = {EMPTY_CELL, " "} if space_is_empty else {EMPTY_CELL}
    count = 0
    while count < len(cells) and cells[len(cells) - count - 1] in empty:
        count += 1
    return count


def cells_to_string(cells: Sequence[Cell]) -> Tuple[str, DeltaTable]:
    """
    Join cells into the string handed to a shaper.

    DWC_RIGHT cells contribute nothing; an empty cell inside the line becomes
    a space so that it still has a string index.

    Args:
        cells: Cells to join

    Returns:
        Tuple of (text, deltas) where deltas maps string indices back to cells
    """
    parts = []
    lengths = []
    for cell in cells:
        if cell is DWC_RIGHT:
            lengths.append(0)
            continue
        text = cell or " "
        parts.append(text)
        lengths.append(len(text))
    return "".join(parts), DeltaTable.from_cell_lengths(lengths)
