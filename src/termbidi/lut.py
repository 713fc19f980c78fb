"""Builds the logical-to-visual lookup table from shaped glyph runs."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .core.ranges import IndexSet
from .position import CellPosition, resolve_positions

logger = logging.getLogger(__name__)


class Direction(Enum):
    LTR = "ltr"
    RTL = "rtl"


@dataclass(frozen=True)
class Glyph:
    """A glyph sample: the string index it came from and where it was drawn."""

    string_index: int
    x: float


@dataclass(frozen=True)
class ShapedRun:
    """
    A span of glyphs laid out in a single direction.

    string_range covers every string index the run consumed, including
    characters merged into a ligature that have no glyph of their own. When it
    is omitted it is taken from the glyphs' string indices.
    """

    direction: Direction
    glyphs: Tuple[Glyph, ...]
    string_range: Optional[range] = None

    def __post_init__(self):
        object.__setattr__(self, "glyphs", tuple(self.glyphs))

    @property
    def is_rtl(self) -> bool:
        return self.direction is Direction.RTL

    def string_indices(self) -> range:
        """String indices covered by this run."""
        if self.string_range is not None:
            return self.string_range
        if not self.glyphs:
            return range(0)
        indices = [glyph.string_index for glyph in self.glyphs]
        return range(min(indices), max(indices) + 1)


class DeltaTable:
    """
    Maps string indices back to logical cells.

    deltas[i] is how far string index i is ahead of its cell, so the cell is
    ``i - deltas[i]``. Cells that contribute several characters make the delta
    grow; cells that contribute none make it shrink.
    """

    def __init__(self, deltas: Sequence[int]):
        self._deltas = tuple(deltas)

    @classmethod
    def identity(cls, length: int) -> "DeltaTable":
        """One string index per cell."""
        return cls([0] * length)

    @classmethod
    def from_cell_lengths(cls, lengths: Iterable[int]) -> "DeltaTable":
        """
        Build a table from the number of characters each cell contributed.

        Args:
            lengths: Characters per cell, in cell order (0 for cells that add nothing)

        Returns:
            DeltaTable covering every contributed character
        """
        deltas = []
        for cell, length in enumerate(lengths):
            for _ in range(length):
                deltas.append(len(deltas) - cell)
        return cls(deltas)

    def cell_for(self, string_index: int) -> int:
        """Get the logical cell that produced a string index."""
        if not (0 <= string_index < len(self._deltas)):
            raise IndexError(f"String index {string_index} out of range")
        return string_index - self._deltas[string_index]

    def __len__(self) -> int:
        return len(self._deltas)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DeltaTable):
            return NotImplemented
        return self._deltas == other._deltas

    def __repr__(self) -> str:
        return f"DeltaTable({list(self._deltas)!r})"


def _cell_for(deltas: DeltaTable, string_index: int, cell_count: int) -> int:
    try:
        cell = deltas.cell_for(string_index)
    except IndexError as e:
        raise ValueError(f"String index {string_index} is not covered by the delta table") from e
    if not (0 <= cell < cell_count):
        raise ValueError(f"String index {string_index} maps to cell {cell}, outside 0..{cell_count}")
    return cell


def build_lookup_table(
    runs: Iterable[ShapedRun],
    deltas: DeltaTable,
    cell_count: int,
) -> Tuple[Tuple[int, ...], IndexSet]:
    """
    Make a lookup table that maps each logical cell to its visual column.

    Args:
        runs: Shaped runs for the line, in any order
        deltas: Mapping from string index to logical cell
        cell_count: Number of logical cells (excluding trailing empty cells)

    Returns:
        Tuple of (lut, rtl_indexes) where lut[cell] is the visual column
    """
    rtl_cells = set()

    # Range of x positions seen for each cell, None if it got no glyph
    position_range_by_cell: List[Optional[Tuple[float, float]]] = [None] * cell_count

    glyph_count = 0
    for run in runs:
        if run.is_rtl:
            for string_index in run.string_indices():
                rtl_cells.add(_cell_for(deltas, string_index, cell_count))

        for glyph in run.glyphs:
            glyph_count += 1
            cell = _cell_for(deltas, glyph.string_index, cell_count)
            existing = position_range_by_cell[cell]
            if existing is None:
                position_range_by_cell[cell] = (glyph.x, glyph.x)
            else:
                position_range_by_cell[cell] = (min(existing[0], glyph.x), max(existing[1], glyph.x))

    positions = []
    for cell, position_range in enumerate(position_range_by_cell):
        if position_range is not None:
            positions.append(CellPosition.absolute(cell, position_range[0]))
        elif cell in rtl_cells:
            # RTL ligature member: drawn left of the glyph that claimed it
            positions.append(CellPosition.left_of_predecessor(cell))
        else:
            positions.append(CellPosition.right_of_predecessor(cell))

    ordered = sorted(resolve_positions(positions), key=lambda resolved: resolved.sort_key)

    lut = [0] * cell_count
    for visual_index, resolved in enumerate(ordered):
        lut[resolved.source_cell] = visual_index

    rtl_indexes = IndexSet.from_indexes(rtl_cells)
    logger.debug(
        f"Built lookup table for {cell_count} cells from {glyph_count} glyphs - rtl runs: {len(rtl_indexes.ranges)}"
    )
    return tuple(lut), rtl_indexes
